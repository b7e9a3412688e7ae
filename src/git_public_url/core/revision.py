from __future__ import annotations

import logging
import re

from .errors import UnknownRevisionError, UnknownTagError
from .git_runner import SafeGitRunner
from .models import DEFAULT_REVISION

logger = logging.getLogger(__name__)

_FULL_HASH_RE = re.compile(r"^(?:[0-9a-f]{40}|[0-9a-f]{64})$")


def _as_full_hash(value: str | None) -> str | None:
    if value and _FULL_HASH_RE.match(value):
        return value
    return None


def is_tag(runner: SafeGitRunner, ref: str) -> bool:
    """True when `ref` names a tag exactly (`git describe --exact-match`)."""
    return runner.run(["describe", "--exact-match", "--tags", ref]).ok


def tag_commit(runner: SafeGitRunner, tag: str) -> str | None:
    """Commit a tag points at, following annotated tags."""
    return _as_full_hash(runner.run(["rev-list", "-n", "1", tag, "--"]).first_line())


def commit_hash(runner: SafeGitRunner, ref: str) -> str | None:
    """
    Resolve a commit-ish. `--revs-only` keeps git from echoing unknown names
    back as if they were paths; `^{commit}` peels whatever the ref names.
    """
    return _as_full_hash(runner.run(["rev-parse", "--revs-only", f"{ref}^{{commit}}"]).first_line())


def resolve_ref(runner: SafeGitRunner, ref: str | None = None) -> tuple[str, bool]:
    """
    Resolve a tag, branch or commit-ish to `(full commit hash, is_tag)`.

    Tag-ness is checked first, so a tag whose name also parses as an
    abbreviated hash resolves through the tag.
    """
    ref = (ref or "").strip() or DEFAULT_REVISION
    if ref.startswith("-"):
        # would be parsed as an option by git
        raise UnknownRevisionError(ref)

    if is_tag(runner, ref):
        commit = tag_commit(runner, ref)
        if commit is None:
            raise UnknownTagError(ref)
        logger.debug("tag %s -> %s", ref, commit)
        return commit, True

    commit = commit_hash(runner, ref)
    if commit is None:
        raise UnknownRevisionError(ref)
    logger.debug("revision %s -> %s", ref, commit)
    return commit, False


def resolve_revision(runner: SafeGitRunner, ref: str | None = None) -> str:
    """Full commit hash for a tag, branch or commit-ish."""
    return resolve_ref(runner, ref)[0]
