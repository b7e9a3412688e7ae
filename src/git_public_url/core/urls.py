from __future__ import annotations

import logging
from typing import Callable

from .models import HostingProvider, RemoteDescriptor
from .remote import parse_remote
from .security import normalize_relpath

logger = logging.getLogger(__name__)

UrlTemplate = Callable[[RemoteDescriptor, str | None, str | None], str]

PROVIDER_HOSTS: dict[str, HostingProvider] = {
    "bitbucket.org": HostingProvider.BITBUCKET,
    "github.com": HostingProvider.GITHUB,
}


def detect_provider(host: str | None) -> HostingProvider:
    return PROVIDER_HOSTS.get((host or "").lower(), HostingProvider.UNRECOGNIZED)


def _bitbucket_url(repo: RemoteDescriptor, commit: str | None, path: str | None) -> str:
    url = repo.web_root
    if path:
        url += f"/src/{commit}/{path}"
    elif commit:
        url += f"/commits/{commit}"
    return url


def _github_url(repo: RemoteDescriptor, commit: str | None, path: str | None) -> str:
    url = repo.web_root
    if path:
        url += f"/blob/{commit}/{path}"
    elif commit:
        url += f"/commit/{commit}"
    return url


TEMPLATES: dict[HostingProvider, UrlTemplate] = {
    HostingProvider.BITBUCKET: _bitbucket_url,
    HostingProvider.GITHUB: _github_url,
}


def compose_url(remote_url: str, commit: str | None = None, path: str | None = None) -> str | None:
    """
    Browsable URL for `commit` (and `path` inside it) on the remote's host.

    Returns None for hosts without a template; that is not an error.
    """
    repo = parse_remote(remote_url)
    if repo is None:
        logger.info("cannot parse remote url %r; no public url", remote_url)
        return None

    template = TEMPLATES.get(detect_provider(repo.host))
    if template is None:
        logger.info("unrecognized hosting provider %r; no public url", repo.host)
        return None

    rel = normalize_relpath(path) if path else None
    return template(repo, commit, rel or None)
