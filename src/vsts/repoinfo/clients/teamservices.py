"""Team Services REST calls that work against any collection URL."""

import logging

from aiohttp import ClientSession

from vsts.repoinfo.model.identity import RepositoryIdentity
from vsts.repoinfo.urls import append_path_segment

logger = logging.getLogger(__name__)

API_VERSION = {"api-version": "1.0"}


async def validate_tfvc_collection_url(session: ClientSession, collection_url: str) -> bool:
    """Check whether collection_url answers as a TFVC project collection.

    Lists the TFVC branches of the candidate collection. A 404 means the URL
    is not a collection.

    Args:
        session: HTTP client session
        collection_url: Candidate collection URL

    Returns:
        True if the collection exists, False if the server answered 404

    Raises:
        aiohttp.ClientError: On any other failure
    """
    url = append_path_segment(collection_url, "_apis/tfvc/branches")
    async with session.get(url, params=API_VERSION) as resp:
        if resp.status == 404:
            logger.debug("Collection url '%s' is not valid (404)", collection_url)
            return False
        resp.raise_for_status()
        return True


async def get_vsts_info(session: ClientSession, remote_url: str) -> RepositoryIdentity:
    """Fetch server identity for a hosted Git repository.

    Args:
        session: HTTP client session
        remote_url: Git remote URL of the repository

    Returns:
        RepositoryIdentity reported by the server

    Raises:
        aiohttp.ClientError: If the request fails
    """
    url = append_path_segment(remote_url, "vsts/info")
    async with session.get(url) as resp:
        resp.raise_for_status()
        body = await resp.json()
    return RepositoryIdentity.model_validate(body)
