"""
statsync/logging_config.py

Purpose:
    Process-wide logging setup for the CLI entry point.
"""

import logging


def setup_logging(level: str | int = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    # httpx logs every request URL at INFO, including the api key parameter.
    logging.getLogger("httpx").setLevel(logging.WARNING)
