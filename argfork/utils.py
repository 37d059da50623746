# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""Logging setup and environment helpers for Argfork."""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Configure logging for Argfork with CLI-friendly or structured JSON output.

    Args:
        mode (str | None):
            Logging output mode. Can be:
                - "cli": human-readable Rich console logs (default outside containers)
                - "json": machine-readable JSON logs (default inside containers)
            If not provided, it will use the `ARGFORK_LOG_MODE` environment variable
            or fallback based on container detection.
        log_filename (str | None):
            Optional path to a log file. No file handler is installed when omitted.
        json_log_to_file (bool):
            Whether to format file logs as JSON instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for console output. Defaults to `logging.WARNING`.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    if not mode:
        mode = os.getenv("ARGFORK_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(
                pythonjsonlogger.json.JsonFormatter(
                    "%(asctime)s %(name)s %(levelname)s %(message)s"
                )
            )
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logging.getLogger("markdown_it").setLevel(logging.WARNING)

    logger = logging.getLogger("argfork")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
