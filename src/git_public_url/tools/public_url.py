from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .common import make_runner
from ..core.errors import FileNotFoundAtRevisionError
from ..core.git_runner import GitRunnerConfig
from ..core.models import HostingProvider, RequestOptions
from ..core.remote import locate_remote, parse_remote
from ..core.revision import resolve_ref, resolve_revision
from ..core.security import normalize_relpath
from ..core.tree import path_exists
from ..core.urls import compose_url, detect_provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublicUrlResult:
    url: str | None
    commit: str
    remote_url: str
    provider: HostingProvider
    file: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "commit": self.commit,
            "remote_url": self.remote_url,
            "provider": self.provider.value,
            "file": self.file,
        }


def resolve_public_url(
    root: str | Path,
    options: RequestOptions | None = None,
    *,
    config: GitRunnerConfig | None = None,
) -> PublicUrlResult:
    """
    Resolve remote and revision in parallel, check the file (if any) at the
    resolved commit, then compose the provider URL.

    The repository root is handed to every git query; the process working
    directory is never changed, so calls for different repositories may run
    concurrently.
    """
    opts = options or RequestOptions()
    runner = make_runner(root, config)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="git-public-url") as pool:
        remote_future = pool.submit(locate_remote, runner, opts.remote)
        commit_future = pool.submit(resolve_revision, runner, opts.commit)
        wait([remote_future, commit_future], return_when=FIRST_EXCEPTION)
        if commit_future.done() and commit_future.exception() is not None:
            # a bad remote is reported ahead of a bad revision
            raise remote_future.exception() or commit_future.exception()
        remote_url = remote_future.result()
        commit = commit_future.result()

    file = None
    if opts.file:
        file = normalize_relpath(opts.file)
        if not path_exists(runner, commit, opts.file):
            raise FileNotFoundAtRevisionError(opts.file, commit)

    repo = parse_remote(remote_url)
    provider = detect_provider(repo.host if repo else None)
    url = compose_url(remote_url, commit, file)
    logger.debug("public url for %s@%s: %s", runner.root, opts.commit, url)

    return PublicUrlResult(url=url, commit=commit, remote_url=remote_url, provider=provider, file=file)


def public_url(
    root: str | Path = ".",
    remote: str | None = None,
    commit: str | None = None,
    file: str | None = None,
) -> str | None:
    """
    Browsable URL for `commit` (default HEAD), or for `file` at that commit,
    on the host of `remote` (default origin). None for unrecognized hosts.
    """
    options = RequestOptions.build(remote=remote, commit=commit, file=file)
    return resolve_public_url(root, options).url


def resolve_revision_info(root: str | Path = ".", commit: str | None = None) -> dict[str, Any]:
    runner = make_runner(root)
    ref = RequestOptions.build(commit=commit).commit
    resolved, tagged = resolve_ref(runner, ref)
    return {"ref": ref, "commit": resolved, "is_tag": tagged}


def remote_info(root: str | Path = ".", remote: str | None = None) -> dict[str, Any]:
    runner = make_runner(root)
    name = RequestOptions.build(remote=remote).remote
    url = locate_remote(runner, name)
    repo = parse_remote(url)
    return {
        "remote": name,
        "url": url,
        "host": repo.host if repo else None,
        "owner": repo.owner if repo else None,
        "project": repo.project if repo else None,
        "provider": detect_provider(repo.host if repo else None).value,
    }
