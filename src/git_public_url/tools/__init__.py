from .public_url import (
    PublicUrlResult,
    public_url,
    remote_info,
    resolve_public_url,
    resolve_revision_info,
)

__all__ = [
    "PublicUrlResult",
    "public_url",
    "remote_info",
    "resolve_public_url",
    "resolve_revision_info",
]
