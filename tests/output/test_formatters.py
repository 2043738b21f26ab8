"""Tests for output mode selection."""

from __future__ import annotations

import json

from signsheet.output.formatters import OutputSettings, format_result
from signsheet.services.result import ServiceResult

_RESULT = ServiceResult(ok=True, op="status", data={"date": "2024-03-15", "signed_in": True})


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        output = format_result(_RESULT)
        assert "2024-03-15" in output
        assert "signed in" in output

    def test_json(self) -> None:
        parsed = json.loads(format_result(_RESULT, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["data"]["signed_in"] is True

    def test_quiet(self) -> None:
        assert format_result(_RESULT, settings=OutputSettings(quiet=True)) == "yes"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_RESULT, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "status"
