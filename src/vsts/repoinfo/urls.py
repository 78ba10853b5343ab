"""URL predicates and decomposition helpers.

Everything here is a pure string function. Whether a remote belongs to the
hosted service is decided from the URL alone, never from server state.
"""

from typing import Optional, Tuple
from urllib.parse import urlparse

TEAM_SERVICES_DOMAIN = ".visualstudio.com"

DEFAULT_COLLECTION_NAME = "DefaultCollection"


def _hostname(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlparse(url.strip()).hostname
    except ValueError:
        # Malformed netloc, e.g. an unbalanced IPv6 bracket
        return None


def _team_services_account(url: Optional[str]) -> Optional[str]:
    hostname = _hostname(url)
    if hostname is None or not hostname.endswith(TEAM_SERVICES_DOMAIN):
        return None
    return hostname.split(".")[0] or None


def is_team_services_url(url: Optional[str]) -> bool:
    """Check if url points at a Team Services ({account}.visualstudio.com) account.

    Args:
        url: Remote URL to check

    Returns:
        True if the host is a subdomain of visualstudio.com with a non-empty
        account label. Malformed URLs are never Team Services URLs.
    """
    return _team_services_account(url) is not None


def is_team_foundation_server_url(url: Optional[str]) -> bool:
    """Check if url looks like an on-premises Team Foundation Server remote."""
    return url is not None and "/tfs/" in url.lower()


def account_from_url(url: Optional[str]) -> Optional[str]:
    """Derive the account name from a remote URL.

    For Team Services the account is the first label of the host. For Team
    Foundation Server it is the host, including any port.

    Args:
        url: Remote URL

    Returns:
        Account name, or None if the URL belongs to neither family
    """
    account = _team_services_account(url)
    if account is not None:
        return account
    if is_team_foundation_server_url(url):
        try:
            netloc = urlparse(url.strip()).netloc
        except ValueError:
            return None
        return netloc.rsplit("@", 1)[-1] or None
    return None


def team_services_server_url(account: str) -> str:
    return f"https://{account}.visualstudio.com/"


def trim_trailing_separators(url: str) -> str:
    return url.rstrip("/")


def split_collection_url(collection_url: Optional[str]) -> Tuple[str, str]:
    """Split a collection URL into its server URL and collection name.

    The true last separator is found after trimming trailing separators, so
    "https://tfs/Coll/" and "https://tfs/Coll" both give ("https://tfs/", "Coll").
    The separators of "scheme://" never count, so a URL without any path
    separator ("https://tfs/") is returned whole with an empty collection name.

    Args:
        collection_url: Full collection URL

    Returns:
        Tuple of (server URL, collection name)
    """
    if not collection_url:
        return "", ""

    trimmed = trim_trailing_separators(collection_url)
    scheme_end = trimmed.find("://")
    index = trimmed.rfind("/", scheme_end + 3 if scheme_end >= 0 else 0)
    if index < 0:
        # No way to tell the collection name apart
        return collection_url, ""
    return trimmed[: index + 1], trimmed[index + 1 :]


def append_path_segment(base_url: str, segment: str) -> str:
    """Append a path segment to base_url with exactly one separator between them.

    Unlike relative reference resolution, the last segment of base_url is kept:
    "https://tfsserver/tfs" + "DefaultCollection" is
    "https://tfsserver/tfs/DefaultCollection".
    """
    return f"{trim_trailing_separators(base_url)}/{segment.lstrip('/')}"


def canonical_collection_url(
    server_url: str, collection_name: str, is_team_services: bool
) -> str:
    """Build the canonical URL of a collection.

    A Team Services account URL already is its collection URL. On-premises,
    the collection name is appended to the server URL, which may differ from
    the shorter URL that was used for validation.
    """
    if is_team_services:
        return server_url
    return append_path_segment(server_url, collection_name)
