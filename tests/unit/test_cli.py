"""
Tests for the frontdiag command-line interface.
"""

import pytest

from frontdiag import __version__
from frontdiag.cli import create_parser, main
from frontdiag.compiler.normalizer import RULES


class TestNormalizeCommand:
    """Tests for `frontdiag normalize`."""

    def test_end_of_line(self, capsys):
        assert main(["normalize", "--token", "eol", "--file", "lib/a.ex", "--line", "2"]) == 1
        assert capsys.readouterr().out == (
            "** (SyntaxError) lib/a.ex:2: unexpectedly reached end of line. "
            "The current expression is invalid or incomplete\n"
        )

    def test_default_file(self, capsys):
        assert main(["normalize"]) == 1
        assert capsys.readouterr().out == (
            "** (TokenMissingError) nofile: syntax error: expression is incomplete\n"
        )

    def test_prefix_suffix(self, capsys):
        main(["normalize", "--prefix", "unexpected ", "--suffix", " here", "--token", "do"])
        assert capsys.readouterr().out == "** (SyntaxError) nofile: unexpected do here\n"

    def test_malformed_token(self, capsys):
        assert main(["normalize", "--token", "{sigil,1}"]) == 2
        assert capsys.readouterr().err.startswith("Internal error: ")

    def test_traceback(self, capsys):
        main(["normalize", "--token", "'end'", "--traceback"])
        out = capsys.readouterr().out
        assert out.startswith("** (SyntaxError) nofile: unexpected token: end\n")
        assert "cmd_normalize" in out


class TestOtherCommands:
    """Tests for rules, decode and warn."""

    def test_rules(self, capsys):
        assert main(["rules"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == len(RULES)
        assert lines[0].split()[1] == "incomplete-expression"
        assert lines[-1].split()[1] == "concatenate"

    def test_decode(self, capsys):
        assert main(["decode", "['Elixir.Foo']"]) == 0
        assert capsys.readouterr().out == "Identifier(name='Elixir.Foo')\n"

    def test_decode_error(self, capsys):
        assert main(["decode", "[a"]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_warn_unlocated(self, capsys):
        assert main(["--no-color", "warn", "hi"]) == 0
        assert capsys.readouterr().err.endswith("warning: hi\n")

    def test_warn_located(self, capsys):
        assert main(["warn", "unused", "--file", "lib/a.ex", "--line", "3"]) == 0
        assert capsys.readouterr().err.endswith("warning: unused\n  lib/a.ex:3\n")

    def test_color_flag(self, capsys):
        main(["--color", "warn", "hi"])
        assert "\x1b[33mwarning: \x1b[0mhi\n" in capsys.readouterr().err


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_color_flags_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--color", "--no-color", "rules"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out
