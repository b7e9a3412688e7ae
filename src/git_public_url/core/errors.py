from __future__ import annotations


class GitPublicUrlError(Exception):
    """Base error for the project."""


class InvalidRootError(GitPublicUrlError):
    pass


class GitPolicyError(GitPublicUrlError):
    pass


class GitExecutionError(GitPublicUrlError):
    pass


class UnknownRemoteError(GitPublicUrlError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown remote '{name}'")


class UnknownTagError(GitPublicUrlError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown tag '{name}'")


class UnknownRevisionError(GitPublicUrlError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown commit revision '{name}'")


class FileNotFoundAtRevisionError(GitPublicUrlError):
    def __init__(self, path: str, commit: str) -> None:
        self.path = path
        self.commit = commit
        super().__init__(f"file '{path}' doesn't exist in commit {commit}")
