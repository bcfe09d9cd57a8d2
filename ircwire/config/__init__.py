"""Configuration model and loader."""

from .loader import ConfigLoader, load_configuration  # noqa: F401
from .model import ClientConfig  # noqa: F401

__all__ = ["ClientConfig", "ConfigLoader", "load_configuration"]
