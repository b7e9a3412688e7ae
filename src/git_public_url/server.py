from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from git_public_url.core.models import RequestOptions
from git_public_url.tools import remote_info, resolve_public_url, resolve_revision_info

mcp = FastMCP("git-public-url")


@mcp.tool()
def public_url_tool(
    root: str = ".",
    remote: str = "origin",
    commit: str = "HEAD",
    file: str | None = None,
) -> dict:
    """Web URL of a commit (or a file at that commit) on GitHub or Bitbucket."""
    options = RequestOptions.build(remote=remote, commit=commit, file=file)
    return resolve_public_url(root, options).to_dict()


@mcp.tool()
def resolve_revision_tool(root: str = ".", commit: str = "HEAD") -> dict:
    return resolve_revision_info(root=root, commit=commit)


@mcp.tool()
def remote_info_tool(root: str = ".", remote: str = "origin") -> dict:
    return remote_info(root=root, remote=remote)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
