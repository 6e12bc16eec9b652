#
#  common.py
#  kbdlight
#
#  Created by turannul on 19/10/2026.
#
#  This program is free software; you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation; version 2 of the License.
#
#  See the LICENSE file for more details.

import logging
import os
import sys
from typing import Dict, Optional, TextIO

# --- Colors ---
cRed = "\033[0;31m"
cGreen = "\033[0;32m"
cYellow = "\033[1;33m"
cReset = "\033[0m"

# --- Exit Codes ---
e_success = 0
e_failure = 1
e_invalid_usage = 2

# --- Environment ---
env_device = "KBDLIGHT_DEVICE"
env_log_level = "KBDLIGHT_LOG_LEVEL"

default_device_path = "/sys/class/leds/smc::kbd_backlight"
default_log_level = logging.WARNING


def setup_logging(name: str = "kbdlight", level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Sets up and returns a standard logger.
    Logs go to stderr unless another stream is given.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []

    formatter = logging.Formatter("[%(levelname)s] %(message)s")

    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setFormatter(formatter)
    logger.addHandler(sh)
    return logger


def log_event(logger: logging.Logger, level_char: str, message: str) -> None:
    """Maps level characters to logging levels and logs the message."""
    level_map: Dict[str, int] = {"-": logging.ERROR, "!": logging.WARNING, "*": logging.INFO, "+": logging.INFO, "#": logging.DEBUG}
    logger.log(level_map.get(level_char, logging.INFO), message)


def colorize(text: str, color: str, stream: Optional[TextIO] = None) -> str:
    """Wraps text in a color code when the stream is a terminal."""
    target = stream if stream is not None else sys.stdout
    isatty = getattr(target, "isatty", None)
    if isatty is not None and isatty():
        return f"{color}{text}{cReset}"
    return text


def get_device_path(env: Optional[Dict[str, str]] = None) -> str:
    """Returns the LED device directory, honouring KBDLIGHT_DEVICE."""
    source = os.environ if env is None else env
    return source.get(env_device) or default_device_path


def get_log_level(env: Optional[Dict[str, str]] = None) -> int:
    """
    Resolves KBDLIGHT_LOG_LEVEL to a logging level, falling back to WARNING.
    Levels above WARNING are capped so diagnostics are never silenced.
    """
    source = os.environ if env is None else env
    name = source.get(env_log_level, "").strip().upper()
    if not name:
        return default_log_level
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    if not isinstance(level, int):
        return default_log_level
    return min(level, default_log_level)
