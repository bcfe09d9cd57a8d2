"""
Configuration constants for the ircwire client

This module contains all configurable constants used throughout the library.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# Wire format
LINE_TERMINATOR = "\r\n"
PRIMARY_ENCODING = "utf-8"
IRC_FALLBACK_ENCODING = _get_env_str(
    "IRC_FALLBACK_ENCODING", "latin-1"
)  # Used when a chunk is not valid UTF-8 (some servers emit legacy bytes)

# Connection defaults
IRC_DEFAULT_PORT = _get_env_int("IRC_DEFAULT_PORT", 6667)
IRC_CONNECT_TIMEOUT = _get_env_float(
    "IRC_CONNECT_TIMEOUT", 10.0
)  # Seconds to wait for the TCP connection to open
IRC_READ_CHUNK_SIZE = _get_env_int(
    "IRC_READ_CHUNK_SIZE", 4096
)  # Bytes requested per transport read

# Handshake defaults
IRC_DEFAULT_USERNAME = _get_env_str("IRC_DEFAULT_USERNAME", "guest")
IRC_DEFAULT_REALNAME = _get_env_str("IRC_DEFAULT_REALNAME", "guest")
IRC_USER_MODE = 8  # Requested user mode bitmask sent in USER (RFC 2812 3.1.3)

# Nickname collision handling
NICK_COLLISION_SUFFIX = "_"

# Mode sigils that may precede nicknames in a NAMES reply
NAMES_MODE_PREFIXES = "~&@%+"
