#!/usr/bin/env python3
"""
Command line entry point: connect, join the configured channels and log traffic.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import load_configuration
from .errors.handling import log_error
from .errors.internal import ConnectFailure, InvalidHostname
from .irc.client import IRCClient
from .irc.observer import LoggingObserver
from .logging_config import LoggerConfigurator
from .logs.logger import logger

QUIT_MESSAGE = "Client exiting"


class AutoJoinObserver(LoggingObserver):
    """Logs every event and joins the configured channels once the MOTD is in."""

    def __init__(self, channels: list[str], client: IRCClient | None = None) -> None:
        super().__init__()
        self.channels = channels
        self.client = client

    def new_motd(self, motd: str) -> None:
        super().new_motd(motd)
        if self.client is None:
            return
        self.nickname = self.client.nickname
        for channel in self.channels:
            self.client.join_channel(channel)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ircwire", description="Minimal IRC client that logs channel traffic."
    )
    parser.add_argument(
        "-c",
        "--config",
        help="JSON configuration file (default: $IRCWIRE_CONF_FILE or ircwire.conf)",
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Run one client session until the server closes the connection.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    logger.log_event("app", "start")
    try:
        config = load_configuration(args.config)
    except (OSError, ValueError) as e:
        log_error("Configuration error", e)
        return 1

    observer = AutoJoinObserver(config.channels)
    observer.nickname = config.nickname
    try:
        client = IRCClient(
            config.server, config.to_user(), observer, realname=config.realname
        )
    except InvalidHostname as e:
        log_error("Configuration error", e)
        return 1
    observer.client = client

    try:
        await client.connect()
    except ConnectFailure:
        return 1

    try:
        await client.wait_closed()
    except asyncio.CancelledError:
        client.quit(QUIT_MESSAGE)
        await client.disconnect()
        raise
    finally:
        logger.log_event("app", "stop")
    return 0


def run() -> None:
    """Synchronous entry point for the console script."""
    LoggerConfigurator().configure()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    run()
