from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


GITHUB_REMOTE = "git@github.com:acme/widgets.git"
BITBUCKET_REMOTE = "https://bitbucket.org/acme/gadgets.git"


def _run(cmd: list[str], cwd: Path) -> str:
    out = subprocess.check_output(
        cmd,
        cwd=str(cwd),
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    return out.strip()


def _init_repo(repo: Path, remote_url: str) -> Path:
    repo.mkdir()

    _run(["git", "init"], repo)
    _run(["git", "config", "user.email", "ci@example.com"], repo)
    _run(["git", "config", "user.name", "CI"], repo)
    _run(["git", "config", "commit.gpgsign", "false"], repo)
    _run(["git", "config", "tag.gpgsign", "false"], repo)
    _run(["git", "remote", "add", "origin", remote_url], repo)

    (repo / "README.md").write_text("# dummy\n", encoding="utf-8")
    (repo / "src").mkdir()
    (repo / "src" / "app.js").write_text("console.log('hi');\n", encoding="utf-8")

    _run(["git", "add", "-A"], repo)
    _run(["git", "commit", "-m", "initial"], repo)
    _run(["git", "tag", "-a", "v1.0", "-m", "release 1.0"], repo)

    (repo / "CHANGELOG.md").write_text("- second\n", encoding="utf-8")
    _run(["git", "add", "-A"], repo)
    _run(["git", "commit", "-m", "second"], repo)

    return repo


@pytest.fixture()
def tmp_git_repo(tmp_path: Path) -> Path:
    """
    Small deterministic repo, origin on GitHub:
      - commit 1: README.md, src/app.js, annotated tag v1.0
      - commit 2 (HEAD): CHANGELOG.md
    """
    return _init_repo(tmp_path / "repo", GITHUB_REMOTE)


@pytest.fixture()
def bitbucket_repo(tmp_path: Path) -> Path:
    return _init_repo(tmp_path / "bb", BITBUCKET_REMOTE)


@pytest.fixture()
def git():
    return _run


@pytest.fixture()
def git_head(tmp_git_repo: Path) -> str:
    return _run(["git", "rev-parse", "HEAD"], tmp_git_repo)


@pytest.fixture()
def tagged_commit(tmp_git_repo: Path) -> str:
    return _run(["git", "rev-parse", "v1.0^{commit}"], tmp_git_repo)
