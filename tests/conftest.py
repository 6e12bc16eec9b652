#
#  conftest.py
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

import pytest

from kbdlight.brightness_common import Backlight


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("kbdlight")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def device(tmp_path):
    """A fake LED device directory with max 100 and level 50."""
    path = tmp_path / "smc::kbd_backlight"
    path.mkdir()
    (path / "max_brightness").write_text("100\n")
    (path / "brightness").write_text("50\n")
    return path


@pytest.fixture
def backlight(device):
    return Backlight(str(device))
