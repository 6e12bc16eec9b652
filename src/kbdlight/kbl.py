#
#  kbl
#  kbdlight
#
#  Created by turannul on 19/10/2026.
#
#  This program is free software; you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation; version 2 of the License.
#
#  See the LICENSE file for more details.

import os
import sys
from typing import Dict, List, Optional

from . import brightness_common
from .brightness_common import Action, Backlight, HelpRequested, InvalidArgument, NoAction, ResourceUnavailable
from .common import cYellow, colorize, e_success, get_device_path, get_log_level, log_event, setup_logging

logger = brightness_common.logger


def _print_usage(program: str, max_level: int) -> None:
    print(colorize(brightness_common.usage(program, max_level), cYellow))


def run(argv: List[str], program: str = "kbdlight", backlight: Optional[Backlight] = None, env: Optional[Dict[str, str]] = None) -> int:
    """Reads max_brightness, parses ``argv`` and applies the action. Returns the exit code."""
    if backlight is None:
        backlight = Backlight(get_device_path(env))

    max_level = brightness_common.get_max_level(backlight.max_brightness)

    try:
        request = brightness_common.parse_args(argv, max_level)
        if request.action is Action.NONE:
            raise NoAction("No action given.")
        brightness_common.change_level(request, max_level, backlight.brightness)
    except HelpRequested as e:
        _print_usage(program, max_level)
        return e.exit_code
    except (InvalidArgument, NoAction) as e:
        log_event(logger, "-", str(e))
        _print_usage(program, max_level)
        return e.exit_code
    except ResourceUnavailable as e:
        log_event(logger, "-", f"Error: {e}")
        if e.permission_denied:
            log_event(logger, "!", "Permission denied. Please run with sudo.")
        return e.exit_code

    return e_success


def main() -> None:
    """Controls keyboard backlight brightness."""
    setup_logging("kbdlight", level=get_log_level())
    program = os.path.basename(sys.argv[0]) or "kbdlight"
    sys.exit(run(sys.argv[1:], program=program))


if __name__ == "__main__":
    main()
