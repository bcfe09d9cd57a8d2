"""Event template catalog.

Templates live in ``event_templates.json`` next to this module, grouped by
domain: ``{"irc": {"recv": "<< {raw}", ...}, ...}``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

DEFAULT_TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")
LOAD_ERROR_KEY = ("app", "load_error")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, Mapping):
        raise ValueError("top level must be an object of domains")
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, template in actions.items()
        if isinstance(action, str) and isinstance(template, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Read the catalog at ``path`` (default: the bundled file).

    Never raises: a missing or broken file yields only ``LOAD_ERROR_KEY`` so
    every event falls back to derived text.
    """
    path = path or DEFAULT_TEMPLATES_PATH
    try:
        with path.open("r", encoding="utf-8") as f:
            return _flatten(json.load(f))
    except FileNotFoundError:
        return {LOAD_ERROR_KEY: "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {LOAD_ERROR_KEY: f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


def template_for(domain: str, action: str) -> str | None:
    return EVENT_TEMPLATES.get((domain, action))


reload_event_templates()

__all__ = [
    "EVENT_TEMPLATES",
    "LOAD_ERROR_KEY",
    "reload_event_templates",
    "template_for",
]
