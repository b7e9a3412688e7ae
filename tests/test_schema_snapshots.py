from __future__ import annotations

from typing import Any

import pytest


def assert_schema(obj: Any, schema: Any, path: str = "$") -> None:
    """
    A tiny schema matcher that is *stable*:
    - schema can be: type (e.g. str), dict of schemas, or callable predicate.
    """
    if isinstance(schema, type):
        assert isinstance(obj, schema), f"{path}: expected {schema.__name__}, got {type(obj).__name__}"
        return

    if callable(schema) and not isinstance(schema, dict):
        assert schema(obj), f"{path}: predicate failed for value={obj!r}"
        return

    if isinstance(schema, dict):
        assert isinstance(obj, dict), f"{path}: expected dict, got {type(obj).__name__}"
        for k, subschema in schema.items():
            assert k in obj, f"{path}: missing key '{k}'"
            assert_schema(obj[k], subschema, f"{path}.{k}")
        return

    raise TypeError(f"Unsupported schema type at {path}: {schema!r}")


def _is_full_hash(v: Any) -> bool:
    return isinstance(v, str) and len(v) == 40 and all(c in "0123456789abcdef" for c in v)


@pytest.mark.parametrize("tool_name", ["public_url", "resolve_revision", "remote_info"])
def test_tools_return_stable_schema(tool_name, tmp_git_repo):
    """
    Snapshot-style schema tests for the MCP tools; volatile values (hashes)
    are checked by shape only.
    """
    from git_public_url.server import public_url_tool, remote_info_tool, resolve_revision_tool

    if tool_name == "public_url":
        out = public_url_tool(root=str(tmp_git_repo), file="README.md")
        assert_schema(out, {
            "url": lambda v: isinstance(v, str) and v.startswith("https://github.com/acme/widgets/blob/"),
            "commit": _is_full_hash,
            "remote_url": str,
            "provider": lambda v: v == "github",
            "file": lambda v: v == "README.md",
        })

    elif tool_name == "resolve_revision":
        out = resolve_revision_tool(root=str(tmp_git_repo), commit="v1.0")
        assert_schema(out, {
            "ref": lambda v: v == "v1.0",
            "commit": _is_full_hash,
            "is_tag": lambda v: v is True,
        })

    elif tool_name == "remote_info":
        out = remote_info_tool(root=str(tmp_git_repo))
        assert_schema(out, {
            "remote": lambda v: v == "origin",
            "url": str,
            "host": lambda v: v == "github.com",
            "owner": lambda v: v == "acme",
            "project": lambda v: v == "widgets",
            "provider": lambda v: v == "github",
        })
