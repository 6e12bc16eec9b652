#
#  brightness_common.py
#  kbdlight
#
#  Created by turannul on 19/10/2026.
#
#  This program is free software; you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation; version 2 of the License.
#
#  See the LICENSE file for more details.

import enum
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from .common import cGreen, colorize, e_failure, e_invalid_usage, log_event

logger = logging.getLogger("kbdlight")

default_max_level = 100

_operand_re = re.compile(r"[+-]?[0-9]+")


# --- Errors ---
class BacklightError(Exception):
    """Base class for failures that end the run."""

    exit_code = e_failure


class CapabilityUnavailable(BacklightError):
    """max_brightness could not be read; recovered with a default."""


class InvalidArgument(BacklightError):
    exit_code = e_invalid_usage


class HelpRequested(InvalidArgument):
    pass


class NoAction(BacklightError):
    pass


class ResourceUnavailable(BacklightError):
    """The brightness attribute could not be opened or written."""

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error.strerror or error}")

    @property
    def permission_denied(self) -> bool:
        return isinstance(self.error, PermissionError)


# --- Data Model ---
class Action(enum.Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"
    SET = "set"
    ZERO = "zero"
    MAX = "max"


@dataclass(frozen=True)
class Request:
    """
    One parsed invocation.

    ``operand`` is the increment for UP/DOWN and the target level for SET;
    it is None for every other action.
    """

    action: Action = Action.NONE
    operand: Optional[int] = None


operand_flags = {"u": Action.UP, "d": Action.DOWN, "s": Action.SET}
plain_flags = {"m": Action.MAX, "o": Action.ZERO}


# --- Resource Accessors ---
class SysfsAttribute:
    """A single sysfs attribute file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def open(self, mode: str = "r") -> TextIO:
        return open(self.path, mode)

    def __repr__(self) -> str:
        return f"SysfsAttribute({self.path!r})"


class Backlight:
    """The max_brightness and brightness attributes of one LED device."""

    def __init__(self, device_path: str) -> None:
        self.device_path = device_path
        self.max_brightness = SysfsAttribute(os.path.join(device_path, "max_brightness"))
        self.brightness = SysfsAttribute(os.path.join(device_path, "brightness"))


# --- Capability Reader ---
def _read_max_level(source) -> int:
    try:
        with source.open("r") as f:
            content = f.read().strip()
    except OSError as e:
        raise CapabilityUnavailable(f"Unable to obtain maximum level from {source.path}: {e.strerror or e}") from e
    except UnicodeDecodeError:
        raise CapabilityUnavailable(f"Unable to decode maximum level from {source.path}") from None
    try:
        value = int(content)
    except ValueError:
        raise CapabilityUnavailable(f"Unable to parse maximum level from {source.path}: {content!r}") from None
    if value < 0:
        raise CapabilityUnavailable(f"Negative maximum level in {source.path}: {value}")
    return value


def get_max_level(source, default: int = default_max_level) -> int:
    """Reads max_brightness. Falls back to ``default`` if it cannot be read."""
    try:
        return _read_max_level(source)
    except CapabilityUnavailable as e:
        log_event(logger, "!", f"{e} (using {default})")
        return default


# --- Argument Parser ---
def usage(program: str, max_level: int) -> str:
    """Returns the help text."""
    return "\n".join([
        "Changes the keyboard backlight brightness.",
        "",
        f"Usage: {program} [option]",
        "Options:",
        "  -u <increment>  Increase brightness by increment.",
        "  -d <increment>  Decrease brightness by increment.",
        f"  -s <level>      Set brightness to a level between 0 and {max_level}.",
        f"  -m              Set brightness to the maximum ({max_level}).",
        "  -o              Turn the backlight off (level 0).",
        "  -h              Show this help.",
        "",
        "Only the first option is used.",
        "",
        "Examples:",
        f"  {program} -u 5",
        f"  {program} -d 10",
        f"  {program} -s {max_level}",
        f"  {program} -m",
        f"  {program} -o",
    ])


def _parse_operand(flag: str, value: str, max_level: int) -> int:
    if not _operand_re.fullmatch(value):
        raise InvalidArgument(f"Option -{flag} expects an integer, got {value!r}.")
    operand = int(value)
    if operand < 0 or operand > max_level:
        raise InvalidArgument(f"Option -{flag} expects a value between 0 and {max_level}, got {operand}.")
    return operand


def parse_args(argv: List[str], max_level: int) -> Request:
    """
    Scans getopt style flags and returns the first action found.

    Operands may be attached (-u5) or the next argument (-u 5), and flags
    may be clustered (-mo). Non-option arguments are skipped and "--" ends
    the scan. Nothing after the first action is looked at.
    """
    i = 0
    while i < len(argv):
        arg = argv[i]
        i += 1
        if arg == "--":
            break
        if arg.startswith("--"):
            raise InvalidArgument(f"Unknown option {arg}.")
        if not arg.startswith("-") or arg == "-":
            continue

        for pos, flag in enumerate(arg[1:], start=1):
            if flag in operand_flags:
                value = arg[pos + 1:]
                if not value:
                    if i >= len(argv):
                        raise InvalidArgument(f"Option -{flag} requires an argument.")
                    value = argv[i]
                    i += 1
                return Request(operand_flags[flag], _parse_operand(flag, value, max_level))
            if flag in plain_flags:
                return Request(plain_flags[flag])
            if flag == "h":
                raise HelpRequested("Help requested.")
            raise InvalidArgument(f"Unknown option -{flag}.")

    return Request(Action.NONE)


# --- Level Mutator ---
def clamp_level(level: int, max_level: int) -> int:
    return max(0, min(level, max_level))


def compute_level(request: Request, current: int, max_level: int) -> int:
    """Returns the clamped level ``request`` asks for, given ``current``."""
    action = request.action
    operand = request.operand if request.operand is not None else 0
    if action is Action.NONE:
        raise NoAction("No action given.")
    elif action is Action.UP:
        new_level = current + operand
    elif action is Action.DOWN:
        new_level = current - operand
    elif action is Action.SET:
        new_level = operand
    elif action is Action.ZERO:
        new_level = 0
    else:
        new_level = max_level
    return clamp_level(new_level, max_level)


def _parse_current_level(content: str, path: str) -> int:
    try:
        return int(content.strip())
    except ValueError:
        log_event(logger, "#", f"Unparsable level {content.strip()!r} in {path}, assuming 0.")
        return 0


def _read_current_level(f, path: str) -> int:
    try:
        content = f.read()
    except UnicodeDecodeError:
        log_event(logger, "#", f"Undecodable level in {path}, assuming 0.")
        return 0
    return _parse_current_level(content, path)


def change_level(request: Request, max_level: int, source) -> Tuple[int, int]:
    """
    Applies ``request`` to the brightness attribute.
    Prints the change and returns (old, new).
    """
    if request.action is Action.NONE:
        raise NoAction("No action given.")

    try:
        f = source.open("r+")
    except OSError as e:
        raise ResourceUnavailable(source.path, e) from e

    try:
        with f:
            current = _read_current_level(f, source.path)
            new_level = compute_level(request, current, max_level)
            f.seek(0)
            f.write(str(new_level))
            f.truncate()
    except OSError as e:
        raise ResourceUnavailable(source.path, e) from e

    log_event(logger, "#", f"{source.path}: {current} -> {new_level} (max {max_level})")
    print(colorize(f"Changed level from {current} to {new_level}", cGreen))
    return current, new_level
