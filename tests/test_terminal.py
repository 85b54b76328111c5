"""Tests for the terminal prompts."""
import pytest

from gh_archiver.infrastructure import terminal
from gh_archiver.infrastructure.github_client import ConfigurationError
from conftest import make_repository


def test_prompt_for_token_strips_input(monkeypatch):
    monkeypatch.setattr(terminal, "getpass", lambda prompt: "  abc123 \n")
    assert terminal.prompt_for_token() == "abc123"


def test_prompt_for_token_rejects_empty(monkeypatch):
    monkeypatch.setattr(terminal, "getpass", lambda prompt: "")
    with pytest.raises(ConfigurationError, match="No token supplied"):
        terminal.prompt_for_token()


@pytest.mark.parametrize("answer, expected", [
    ("y", True),
    ("YES", True),
    (" Yes ", True),
    ("", False),
    ("n", False),
    ("maybe", False),
])
def test_confirm_archive(monkeypatch, answer, expected):
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return answer

    monkeypatch.setattr("builtins.input", fake_input)

    assert terminal.confirm_archive(make_repository("old-project")) is expected
    assert "Do you want to archive old-project?" in prompts[0]
    assert "Last update: 2023-01-01" in prompts[0]
