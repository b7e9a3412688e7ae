from __future__ import annotations

from pathlib import Path

from .errors import InvalidRootError


def resolve_root(root: str | Path) -> Path:
    """Resolve and validate root directory for local-repo operations."""
    p = Path(root).expanduser().resolve()

    if not p.exists():
        raise InvalidRootError(f"Root does not exist: {p}")
    if not p.is_dir():
        raise InvalidRootError(f"Root is not a directory: {p}")

    return p


def normalize_relpath(path: str) -> str:
    """
    Normalize a user-provided repository path: forward slashes, no leading
    './', no leading or trailing '/'.
    """
    s = (path or "").strip().replace("\\", "/").lstrip("/")
    while s.startswith("./"):
        s = s[2:]
    return s.strip("/")
