"""
Tests for the operator prompts and the prompt text sent to the model.

Run with:
    pytest tests/test_prompt.py -v
    pytest tests/test_prompt.py -v -s   # see actual terminal output
"""

import subprocess
from pathlib import Path

import pytest

from aicommit import COMMIT_TYPE_NAMES
from aicommit.cli import prompt
from aicommit.cli.prompt import edit_message, prompt_user
from aicommit.prompts import SYSTEM_PROMPT, build_messages, user_prompt
from aicommit.workflow import Decision


@pytest.fixture
def answers(monkeypatch):
    """Feed scripted lines to input(); returns the list of prompts shown."""
    shown = []

    def _feed(*lines):
        queue = list(lines)

        def _input(text=""):
            shown.append(text)
            item = queue.pop(0)
            if isinstance(item, BaseException):
                raise item
            return item

        monkeypatch.setattr("builtins.input", _input)
        return shown

    return _feed


# ---------------------------------------------------------------------------
# prompt_user
# ---------------------------------------------------------------------------

class TestPromptUser:

    @pytest.mark.parametrize("line, expected", [
        ("", Decision.ACCEPT),
        ("a", Decision.ACCEPT),
        ("  A  ", Decision.ACCEPT),
        ("e", Decision.EDIT),
        ("edit", Decision.EDIT),
        ("r", Decision.REGENERATE),
        ("R", Decision.REGENERATE),
    ])
    def test_choices(self, answers, line, expected):
        answers(line)
        assert prompt_user("feat: add login") is expected

    def test_displays_message(self, answers, capsys):
        answers("")
        prompt_user("feat(auth): add login")
        out = capsys.readouterr().out
        assert "feat(auth): add login" in out
        assert "─" in out or "-" in out

    def test_reasks_on_unknown_input(self, answers, capsys):
        shown = answers("x", "maybe", "r")
        assert prompt_user("feat: add login") is Decision.REGENERATE
        assert len(shown) == 3
        assert capsys.readouterr().out.count("Enter e, r, or press Enter") == 2

    def test_eof_is_cancellation(self, answers):
        answers(EOFError())
        with pytest.raises(KeyboardInterrupt):
            prompt_user("feat: add login")

    def test_ctrl_c_is_cancellation(self, answers):
        answers(KeyboardInterrupt())
        with pytest.raises(KeyboardInterrupt):
            prompt_user("feat: add login")


# ---------------------------------------------------------------------------
# edit_message
# ---------------------------------------------------------------------------

class TestEditMessage:

    @pytest.fixture
    def editor(self, monkeypatch):
        """Fake editor: records the command, rewrites the file with `result`."""
        state = {"result": "fix: edited message\n", "error": None, "seen": None, "cmd": None}

        def _run(cmd, check=False, **kwargs):
            state["cmd"] = cmd
            path = Path(cmd[-1])
            state["seen"] = path.read_text(encoding="utf-8")
            if state["error"] is not None:
                raise state["error"]
            path.write_text(state["result"], encoding="utf-8")
            return subprocess.CompletedProcess(cmd, 0)

        monkeypatch.setattr(prompt.subprocess, "run", _run)
        monkeypatch.setenv("EDITOR", "nano")
        monkeypatch.delenv("VISUAL", raising=False)
        return state

    def test_returns_edited_text(self, editor):
        assert edit_message("feat: add login") == "fix: edited message"

    def test_seeds_file_with_message(self, editor):
        edit_message("feat: add login")
        assert editor["seen"] == "feat: add login"

    def test_uses_editor_env(self, editor):
        edit_message("feat: add login")
        assert editor["cmd"][0] == "nano"
        assert editor["cmd"][-1].endswith(".gitcommit")

    def test_visual_wins_and_may_have_arguments(self, editor, monkeypatch):
        monkeypatch.setenv("VISUAL", "code --wait")
        edit_message("feat: add login")
        assert editor["cmd"][:2] == ["code", "--wait"]

    def test_blank_result_keeps_message(self, editor):
        editor["result"] = "   \n"
        assert edit_message("feat: add login") == "feat: add login"

    def test_editor_failure_keeps_message(self, editor, capsys):
        editor["error"] = subprocess.CalledProcessError(1, ["nano"])
        assert edit_message("feat: add login") == "feat: add login"
        assert "Editor failed" in capsys.readouterr().err

    def test_temp_file_removed(self, editor):
        edit_message("feat: add login")
        assert not Path(editor["cmd"][-1]).exists()


# ---------------------------------------------------------------------------
# Prompt text
# ---------------------------------------------------------------------------

class TestPromptText:

    def test_user_prompt_wraps_diff(self):
        text = user_prompt("+hello")
        assert "<diff>\n+hello\n</diff>" in text
        assert text.endswith("</diff>")

    def test_user_prompt_lists_commit_types(self):
        text = user_prompt("+hello")
        assert ", ".join(COMMIT_TYPE_NAMES) in text
        assert all(isinstance(name, str) for name in COMMIT_TYPE_NAMES)
        assert "conventional commits" in text

    def test_braces_in_diff_survive(self):
        diff = "+const x = {a: 1};"
        assert diff in user_prompt(diff)

    def test_build_messages_order(self):
        messages = build_messages("+hello")
        assert messages == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt("+hello")},
        ]
