#
#  test_arguments.py
#  kbdlight
#
#  Created by turannul on 19/10/2026.
#
#  This program is free software; you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation; version 2 of the License.
#
#  See the LICENSE file for more details.

import pytest

from kbdlight.brightness_common import Action, HelpRequested, InvalidArgument, Request, parse_args, usage
from kbdlight.common import e_invalid_usage


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["-u", "5"], Request(Action.UP, 5)),
        (["-d", "10"], Request(Action.DOWN, 10)),
        (["-s", "42"], Request(Action.SET, 42)),
        (["-m"], Request(Action.MAX)),
        (["-o"], Request(Action.ZERO)),
        (["-u5"], Request(Action.UP, 5)),
        (["-s+7"], Request(Action.SET, 7)),
        (["-s", "0"], Request(Action.SET, 0)),
        (["-s", "100"], Request(Action.SET, 100)),
    ],
)
def test_actions(argv, expected):
    assert parse_args(argv, 100) == expected


def test_no_arguments():
    assert parse_args([], 100) == Request(Action.NONE)


def test_non_options_are_skipped():
    assert parse_args(["foo", "-o"], 100) == Request(Action.ZERO)
    assert parse_args(["foo", "bar"], 100) == Request(Action.NONE)


def test_double_dash_ends_scan():
    assert parse_args(["--", "-m"], 100) == Request(Action.NONE)


class TestFirstActionWins:
    def test_later_flags_ignored(self):
        assert parse_args(["-m", "-s", "5"], 100) == Request(Action.MAX)
        assert parse_args(["-d", "3", "-u", "4"], 100) == Request(Action.DOWN, 3)

    def test_later_invalid_flags_ignored(self):
        assert parse_args(["-o", "-x"], 100) == Request(Action.ZERO)
        assert parse_args(["-o", "-s", "500"], 100) == Request(Action.ZERO)

    def test_cluster(self):
        assert parse_args(["-mo"], 100) == Request(Action.MAX)
        assert parse_args(["-om"], 100) == Request(Action.ZERO)


class TestInvalid:
    @pytest.mark.parametrize("flag", ["-u", "-d", "-s"])
    @pytest.mark.parametrize("value", ["-1", "101", "150", "abc", "5x", "", " 5", "1_0"])
    def test_bad_operand(self, flag, value):
        with pytest.raises(InvalidArgument):
            parse_args([flag, value], 100)

    @pytest.mark.parametrize("flag", ["-u", "-d", "-s"])
    def test_missing_operand(self, flag):
        with pytest.raises(InvalidArgument, match="requires an argument"):
            parse_args([flag], 100)

    def test_range_follows_max_level(self):
        assert parse_args(["-s", "3"], 3) == Request(Action.SET, 3)
        with pytest.raises(InvalidArgument):
            parse_args(["-s", "4"], 3)

    @pytest.mark.parametrize("argv", [["-x"], ["--help"], ["--max"], ["-xm"]])
    def test_unknown_flag(self, argv):
        with pytest.raises(InvalidArgument, match="Unknown option"):
            parse_args(argv, 100)

    def test_help(self):
        with pytest.raises(HelpRequested) as exc:
            parse_args(["-h"], 100)
        assert exc.value.exit_code == e_invalid_usage

    def test_help_before_action(self):
        with pytest.raises(HelpRequested):
            parse_args(["-h", "-m"], 100)

    def test_exit_code(self):
        with pytest.raises(InvalidArgument) as exc:
            parse_args(["-s", "150"], 100)
        assert exc.value.exit_code == e_invalid_usage


def test_usage_mentions_max_level():
    text = usage("kbdlight", 3)
    assert "Usage: kbdlight" in text
    assert "between 0 and 3" in text
    for flag in ["-u", "-d", "-s", "-m", "-o", "-h"]:
        assert f"  {flag} " in text
