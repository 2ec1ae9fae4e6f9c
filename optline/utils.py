# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py

Logging setup for programs built on optline. Parse steps are logged at DEBUG
on the `optline` logger; `setup_logging` decides where they go.
"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
LOG_MODES = ("cli", "json")

CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as cgroup:
            content = cgroup.read()
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def default_log_mode() -> str:
    """`OPTLINE_LOG_MODE`, else "json" inside a container and "cli" outside."""
    return os.getenv("OPTLINE_LOG_MODE") or ("json" if running_in_container() else "cli")


def console_handler(mode: str, level: int) -> logging.Handler:
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")
    handler: logging.Handler
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    else:
        # Tokens may hold brackets; never read them as rich markup.
        handler = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
    handler.setLevel(level)
    return handler


def file_handler(filename: str, level: int, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(level)
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Replace the root logger's handlers with a console handler and, when
    `log_filename` is given, a file handler.

    `mode` is "cli" for rich console output or "json" for one JSON object per
    record; it defaults to `default_log_mode()`.

    Raises:
        ValueError: If `mode` is not a known log mode.
    """
    mode = mode or default_log_mode()
    handlers = [console_handler(mode, console_log_level)]
    if log_filename:
        handlers.append(file_handler(log_filename, file_log_level, json_log_to_file))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)
    for handler in handlers:
        root.addHandler(handler)
    logging.getLogger("optline").debug(
        "Logging set up in %s mode with %d handlers", mode, len(handlers)
    )
