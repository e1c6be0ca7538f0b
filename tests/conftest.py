import subprocess
from pathlib import Path
from typing import Callable, Generator

import pytest
from click.testing import CliRunner

from git_feature.operations import MemoryStateStore, Prompter, ToolConfig


class ScriptedPrompter(Prompter):
    """Prompter answering from pre-recorded replies."""

    def __init__(
        self,
        selections: list[str] | None = None,
        confirmations: list[bool] | None = None,
        texts: list[str] | None = None,
        on_confirm: Callable[[], None] | None = None,
    ):
        self.selections = list(selections or [])
        self.confirmations = list(confirmations or [])
        self.texts = list(texts or [])
        self.on_confirm = on_confirm
        self.calls: list[tuple[str, str]] = []

    def select_one(self, message: str, options: list[str]) -> str:
        self.calls.append(("select_one", message))
        choice = self.selections.pop(0)
        assert choice in options
        return choice

    def confirm(self, message: str) -> bool:
        self.calls.append(("confirm", message))
        if self.on_confirm is not None:
            self.on_confirm()
        return self.confirmations.pop(0) if self.confirmations else True

    def text_input(self, message: str, default: str) -> str:
        self.calls.append(("text_input", message))
        value = self.texts.pop(0) if self.texts else ""
        return value or default

    def count(self, kind: str) -> int:
        return sum(1 for name, _ in self.calls if name == kind)


def git(repo: Path, *args: str) -> str:
    """Run a real git command in a test repository."""
    result = subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with a main branch."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init"], cwd=repo, check=True)
    subprocess.run(["git", "config", "user.name", "Test User"], cwd=repo, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"], cwd=repo, check=True
    )
    subprocess.run(["git", "config", "rerere.enabled", "false"], cwd=repo, check=True)
    subprocess.run(["git", "config", "pull.rebase", "false"], cwd=repo, check=True)
    subprocess.run(["git", "config", "commit.gpgsign", "false"], cwd=repo, check=True)

    (repo / "README.md").write_text("# Test Repo\n")
    subprocess.run(["git", "add", "."], cwd=repo, check=True)
    subprocess.run(["git", "commit", "-m", "Initial commit"], cwd=repo, check=True)

    cur = git(repo, "symbolic-ref", "--short", "HEAD")
    if cur != "main":
        subprocess.run(["git", "branch", "-m", cur, "main"], cwd=repo, check=True)

    yield repo


@pytest.fixture
def temp_repo_with_origin(temp_git_repo: Path, tmp_path: Path) -> Path:
    """A repository whose main branch is published to a bare 'origin'."""
    origin = tmp_path / "origin.git"
    subprocess.run(["git", "init", "--bare", str(origin)], check=True)
    subprocess.run(
        ["git", "remote", "add", "origin", str(origin)], cwd=temp_git_repo, check=True
    )
    subprocess.run(["git", "push", "origin", "main"], cwd=temp_git_repo, check=True)
    return temp_git_repo


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def memory_store() -> MemoryStateStore:
    return MemoryStateStore(
        features=["login-page"],
        commit_log={"login-page": ["a1b2", "c3d4"]},
    )


@pytest.fixture
def tool_config(tmp_path: Path) -> ToolConfig:
    return ToolConfig(state_dir=tmp_path / "state")


@pytest.fixture
def make_prompter() -> type[ScriptedPrompter]:
    return ScriptedPrompter


@pytest.fixture
def run_git() -> Callable[..., str]:
    return git
