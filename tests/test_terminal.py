"""Test terminal probing and prompting."""

import io
import os
from unittest.mock import patch

import pytest

from ghsponsors.core.errors import PromptError
from ghsponsors.core.terminal import RichPrompter, Terminal


class TestTerminal:
    """Test Terminal.from_env()."""

    @pytest.fixture(autouse=True)
    def real_size(self):
        with patch("ghsponsors.core.terminal.shutil.get_terminal_size",
                   return_value=os.terminal_size((120, 40))):
            yield

    def test_not_a_tty(self):
        with patch("sys.stdout", io.StringIO()):
            term = Terminal.from_env()
        assert term.is_terminal_output() is False
        assert term.size() == (120, 40)

    def test_force_tty(self, monkeypatch):
        monkeypatch.setenv("GH_FORCE_TTY", "1")
        with patch("sys.stdout", io.StringIO()):
            term = Terminal.from_env()
        assert term.is_terminal_output() is True
        assert term.size() == (1, 40)

    def test_force_tty_width(self, monkeypatch):
        monkeypatch.setenv("GH_FORCE_TTY", "100")
        term = Terminal.from_env()
        assert term.is_terminal_output() is True
        assert term.size() == (100, 40)

    def test_force_tty_percentage(self, monkeypatch):
        monkeypatch.setenv("GH_FORCE_TTY", "50%")
        assert Terminal.from_env().size() == (60, 40)

    def test_force_tty_flag(self, monkeypatch):
        monkeypatch.setenv("GH_FORCE_TTY", "true")
        term = Terminal.from_env()
        assert term.is_terminal_output() is True
        assert term.size() == (120, 40)

    def test_force_tty_disabled(self, monkeypatch):
        monkeypatch.setenv("GH_FORCE_TTY", "false")
        with patch("sys.stdout", io.StringIO()):
            assert Terminal.from_env().is_terminal_output() is False

    def test_no_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert Terminal.from_env().color is False


class TestRichPrompter:
    """Test the rich-backed prompter."""

    def make(self, stdin):
        term = Terminal(stdin=io.StringIO(stdin), stdout=io.StringIO(),
                        stderr=io.StringIO(), is_tty=True, color=False)
        return term, RichPrompter(term)

    def test_reads_answer(self):
        term, prompter = self.make("octocat\n")
        assert prompter.input("Which user do you want to target?", "") == "octocat"
        assert "Which user do you want to target?" in term.stderr.getvalue()

    def test_empty_answer_uses_default(self):
        _, prompter = self.make("\n")
        assert prompter.input("Which user?", "") == ""

    def test_end_of_input(self):
        _, prompter = self.make("")
        with pytest.raises(PromptError, match="could not prompt: end of input"):
            prompter.input("Which user?", "")

    def test_interrupt_becomes_prompt_error(self):
        _, prompter = self.make("")
        with patch("ghsponsors.core.terminal.Prompt.ask", side_effect=KeyboardInterrupt):
            with pytest.raises(PromptError):
                prompter.input("Which user?", "")
