from __future__ import annotations

from pathlib import Path

from ..core.git_runner import GitRunnerConfig, SafeGitRunner
from ..core.security import resolve_root


_DEFAULT_CFG = GitRunnerConfig(timeout_s=None)


def make_runner(root: str | Path = ".", config: GitRunnerConfig | None = None) -> SafeGitRunner:
    return SafeGitRunner(root=resolve_root(root), config=config or _DEFAULT_CFG)
