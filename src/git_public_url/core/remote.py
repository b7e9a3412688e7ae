from __future__ import annotations

import re
from urllib.parse import urlparse

from .errors import UnknownRemoteError
from .git_runner import SafeGitRunner
from .models import DEFAULT_REMOTE, RemoteDescriptor

# user@host:owner/project(.git), the scp-like syntax git accepts for ssh
_SCP_LIKE_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


def remote_url(runner: SafeGitRunner, name: str) -> str | None:
    """Configured fetch URL of remote `name`, or None."""
    return runner.run(["config", "--get", f"remote.{name}.url"]).first_line()


def locate_remote(runner: SafeGitRunner, name: str | None = None) -> str:
    name = (name or "").strip() or DEFAULT_REMOTE
    url = remote_url(runner, name)
    if url is None:
        raise UnknownRemoteError(name)
    return url


def _split_remote(url: str) -> tuple[str, str] | None:
    if "://" in url:
        parsed = urlparse(url)
        if not parsed.hostname:
            return None
        return parsed.hostname, parsed.path

    m = _SCP_LIKE_RE.match(url)
    if m is None:
        return None
    return m.group("host"), m.group("path")


def parse_remote(url: str) -> RemoteDescriptor | None:
    """
    Split a remote URL into host/owner/project.

    Handles https/http/ssh/git URLs and scp-like `git@host:owner/project.git`.
    Returns None when the URL has no host or fewer than two path segments.
    """
    raw = (url or "").strip()
    split = _split_remote(raw)
    if split is None:
        return None

    host, path = split
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return None

    owner, project = segments[0], segments[1]
    if project.endswith(".git"):
        project = project[:-4]
    if not project:
        return None

    return RemoteDescriptor(url=raw, host=host.lower(), owner=owner, project=project)
