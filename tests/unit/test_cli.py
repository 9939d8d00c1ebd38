"""Tests for calcline CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from calcline.cli import app
from calcline.logging import setup_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep a stray calcline.toml in the working directory out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CALCLINE_CONFIG", raising=False)
    yield
    # Drop handlers bound to the runner's captured streams
    setup_logging()


# ---------------------------------------------------------------------------
# calcline eval
# ---------------------------------------------------------------------------


class TestEval:
    def test_precedence(self) -> None:
        result = runner.invoke(app, ["eval", "2 + 6 * 6 ="])
        assert result.exit_code == 0
        assert result.output.strip() == "38"

    def test_parentheses(self) -> None:
        result = runner.invoke(app, ["eval", "(2 + 6) * 6"])
        assert result.exit_code == 0
        assert "48" in result.output

    def test_invalid_input(self) -> None:
        result = runner.invoke(app, ["eval", "2 a 2"])
        assert result.exit_code == 1
        assert "invalid input" in result.output

    def test_explain_division_by_zero(self) -> None:
        result = runner.invoke(app, ["eval", "--explain", "5 / 0"])
        assert result.exit_code == 1
        assert "division_by_zero" in result.output

    def test_explain_parse_error(self) -> None:
        result = runner.invoke(app, ["eval", "-e", "1 + + 2"])
        assert result.exit_code == 1
        assert "malformed_number" in result.output
        assert "1++2" in result.output

    def test_overlong_number(self) -> None:
        result = runner.invoke(app, ["eval", "-e", "9" * 5000])
        assert result.exit_code == 1
        assert "number_too_long" in result.output

    def test_long_chain(self) -> None:
        result = runner.invoke(app, ["eval", "-e", "+".join(["1"] * 3000)])
        assert result.exit_code == 1
        assert "too_deep" in result.output


# ---------------------------------------------------------------------------
# calcline repl
# ---------------------------------------------------------------------------


class TestRepl:
    def test_session_until_exit(self) -> None:
        result = runner.invoke(app, ["repl"], input="1-2-3\n7/2\nexit\n9*9\n")
        assert result.exit_code == 0
        assert "1-2-3 -4" in result.output
        assert "7/2 3" in result.output
        assert "81" not in result.output
        assert "Quitting..." in result.output

    def test_end_of_input_ends_session(self) -> None:
        result = runner.invoke(app, ["repl"], input="2*21\n")
        assert result.exit_code == 0
        assert "2*21 42" in result.output
        assert "Quitting..." in result.output


# ---------------------------------------------------------------------------
# calcline tree
# ---------------------------------------------------------------------------


class TestTree:
    def test_shows_tree_and_value(self) -> None:
        result = runner.invoke(app, ["tree", "1-2-3"])
        assert result.exit_code == 0
        assert "5 nodes, depth 3" in result.output
        assert "= -4" in result.output

    def test_parse_error(self) -> None:
        result = runner.invoke(app, ["tree", "(1+2"])
        assert result.exit_code == 1
        assert "unmatched_paren" in result.output

    def test_deep_nesting_is_rejected(self) -> None:
        result = runner.invoke(app, ["tree", "(" * 400 + "1" + ")" * 400])
        assert result.exit_code == 1
        assert "too_deep" in result.output


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "calcline" in result.output

    def test_config_option(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text('[calculator]\ninvalid_message = "nope"\nstrict_parentheses = false\n')
        result = runner.invoke(app, ["--config", str(config), "eval", "(1+2"])
        assert result.exit_code == 0
        assert "3" in result.output

        result = runner.invoke(app, ["--config", str(config), "eval", "1/0"])
        assert result.exit_code == 1
        assert "nope" in result.output

    def test_config_from_working_directory(self, tmp_path: Path) -> None:
        (tmp_path / "calcline.toml").write_text('[calculator]\ninvalid_message = "ERR"\n')
        result = runner.invoke(app, ["eval", "x"])
        assert "ERR" in result.output

    def test_config_from_environment(self, tmp_path: Path) -> None:
        config = tmp_path / "env.toml"
        config.write_text("[calculator]\nint_bits = 8\n")
        result = runner.invoke(app, ["eval", "200"], env={"CALCLINE_CONFIG": str(config)})
        assert result.exit_code == 1

    def test_bad_config(self, tmp_path: Path) -> None:
        config = tmp_path / "bad.toml"
        config.write_text("[calculator]\nunknown = 1\n")
        result = runner.invoke(app, ["--config", str(config), "eval", "1"])
        assert result.exit_code == 2
        assert "Error" in result.output

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "calcline.log"
        result = runner.invoke(app, ["--verbose", "--log-file", str(log_file), "eval", "5/0"])
        assert result.exit_code == 1
        text = log_file.read_text(encoding="utf-8")
        assert "Rejected '5/0'" in text
        assert "division_by_zero" in text

    def test_log_file_quiet_by_default(self, tmp_path: Path) -> None:
        log_file = tmp_path / "calcline.log"
        result = runner.invoke(app, ["--log-file", str(log_file), "eval", "5/0"])
        assert result.exit_code == 1
        assert log_file.read_text(encoding="utf-8") == ""
