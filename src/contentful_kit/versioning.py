"""Optimistic concurrency headers.

Mutating calls can assert the caller's last-known version of a resource
with the ``X-Contentful-Version`` header; the server answers 409 when it
does not match. Scope headers (organization, content type) follow the same
rule: they are built into a fresh header mapping for one request and never
stored on the shared HTTP client, so concurrent calls cannot observe or
remove each other's headers.
"""

VERSION_HEADER = "X-Contentful-Version"
ORGANIZATION_HEADER = "X-Contentful-Organization"
CONTENT_TYPE_HEADER = "X-Contentful-Content-Type"


def with_version(version: int | None, headers: dict[str, str] | None = None) -> dict[str, str]:
    """Return request headers carrying ``version`` as a precondition.

    Args:
        version: Last known version, or None to target the current version
        headers: Headers to start from (not modified)

    Returns:
        A new header mapping for a single request

    Examples:
        >>> with_version(3)
        {'X-Contentful-Version': '3'}
        >>> with_version(None, {"Accept": "application/json"})
        {'Accept': 'application/json'}
    """
    scoped = dict(headers or {})
    if version is not None:
        scoped[VERSION_HEADER] = str(version)
    return scoped


def scope_headers(
    *,
    version: int | None = None,
    organization_id: str | None = None,
    content_type_id: str | None = None,
) -> dict[str, str]:
    """Build the per-request scope headers for one call."""
    headers: dict[str, str] = {}
    if organization_id:
        headers[ORGANIZATION_HEADER] = organization_id
    if content_type_id:
        headers[CONTENT_TYPE_HEADER] = content_type_id
    return with_version(version, headers)
