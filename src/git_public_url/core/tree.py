from __future__ import annotations

from .git_runner import SafeGitRunner
from .security import normalize_relpath


def path_exists(runner: SafeGitRunner, commit: str, path: str) -> bool:
    """
    Whether `path` is present in the tree of `commit`.

    A missing path is a plain False; git's diagnostics are dropped.
    """
    rel = normalize_relpath(path)
    if not rel:
        return False
    return runner.run(["cat-file", "-e", f"{commit}:{rel}"]).ok
