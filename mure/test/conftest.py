"""Shared fixtures: throwaway git repositories driven by the real git binary."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest


class GitSandbox:
    """Builds upstreams and clones under one temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._counter = 0

    def run(self, cwd: Path, *args: str) -> str:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout.strip()

    def init(self, name: str) -> Path:
        path = self.root / name
        path.mkdir(parents=True)
        self.run(path, "init", "--quiet")
        self.run(path, "symbolic-ref", "HEAD", "refs/heads/main")
        return path

    def commit(self, repo: Path, filename: str | None = None) -> str:
        self._counter += 1
        filename = filename or f"file{self._counter}.txt"
        (repo / filename).write_text(f"change {self._counter}\n", encoding="utf-8")
        self.run(repo, "add", filename)
        self.run(repo, "commit", "--quiet", "-m", f"commit {self._counter}")
        return self.head(repo)

    def upstream(self, name: str = "upstream") -> Path:
        """A non-bare repository on ``main`` with one commit."""
        path = self.init(name)
        self.commit(path)
        return path

    def clone(self, source: Path, name: str) -> Path:
        dest = self.root / name
        dest.parent.mkdir(parents=True, exist_ok=True)
        self.run(self.root, "clone", "--quiet", str(source), str(dest))
        return dest

    def head(self, repo: Path) -> str:
        return self.run(repo, "rev-parse", "HEAD")

    def current_branch(self, repo: Path) -> str:
        return self.run(repo, "symbolic-ref", "--short", "HEAD")

    def branches(self, repo: Path) -> list[str]:
        out = self.run(repo, "for-each-ref", "--format=%(refname:short)", "refs/heads/")
        return out.split()


@pytest.fixture
def git_sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitSandbox:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)

    root = tmp_path / "sandbox"
    root.mkdir()
    return GitSandbox(root)
