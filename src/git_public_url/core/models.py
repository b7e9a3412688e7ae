from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


DEFAULT_REMOTE = "origin"
DEFAULT_REVISION = "HEAD"


@dataclass(frozen=True)
class GitRunResult:
    argv: list[str]
    root: str
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int
    timed_out: bool

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    def first_line(self) -> str | None:
        """First non-empty stdout line, or None when the query failed or printed nothing."""
        if not self.ok:
            return None
        for ln in self.stdout.splitlines():
            if ln.strip():
                return ln.strip()
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "argv": self.argv,
            "root": self.root,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exit_code": self.exit_code,
            "duration_ms": self.duration_ms,
            "timed_out": self.timed_out,
        }


class HostingProvider(str, Enum):
    BITBUCKET = "bitbucket"
    GITHUB = "github"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class RemoteDescriptor:
    url: str
    host: str
    owner: str
    project: str

    @property
    def web_root(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.project}"


@dataclass(frozen=True)
class RequestOptions:
    remote: str = DEFAULT_REMOTE
    commit: str = DEFAULT_REVISION
    file: str | None = None

    @classmethod
    def build(
        cls,
        remote: str | None = None,
        commit: str | None = None,
        file: str | None = None,
    ) -> "RequestOptions":
        """Substitute defaults for missing or blank values."""
        return cls(
            remote=(remote or "").strip() or DEFAULT_REMOTE,
            commit=(commit or "").strip() or DEFAULT_REVISION,
            file=file or None,
        )
