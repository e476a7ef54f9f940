"""Tests for CLI output helpers."""

import pytest

from beetask.cli.output import machine_output, user_output


def test_user_output_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    user_output("for humans")
    machine_output("for scripts")

    captured = capsys.readouterr()
    assert captured.err == "for humans\n"
    assert captured.out == "for scripts\n"
