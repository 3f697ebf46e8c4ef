"""Mini README: Tests for the settlement command of the launcher CLI."""

from __future__ import annotations

from typer.testing import CliRunner

from main_dashboard import cli

runner = CliRunner()


def test_settlement_command_prints_member_positions() -> None:
    result = runner.invoke(cli, ["settlement", "2"])

    assert result.exit_code == 0
    assert "Birthday Party" in result.output
    assert "John Doe: Should receive $39.89" in result.output
    assert "Emily Davis: Should pay $20.11" in result.output
    assert "Most expensive item: Food and drinks ($120.00)" in result.output


def test_settlement_command_rejects_unknown_group() -> None:
    result = runner.invoke(cli, ["settlement", "404"])

    assert result.exit_code == 1
