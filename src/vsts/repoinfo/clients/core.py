"""REST lookups against the core area (project collections and team projects).

The project collection call needs instance-level permissions on-premises, so
the resolver only uses it for Team Services.
"""

import logging
from typing import Optional
from urllib.parse import quote

from aiohttp import ClientSession

from vsts.repoinfo.model.identity import Collection, Project
from vsts.repoinfo.urls import append_path_segment

logger = logging.getLogger(__name__)

API_VERSION = {"api-version": "1.0"}


async def get_project_collection(
    session: ClientSession, server_url: str, collection_name: str
) -> Optional[Collection]:
    """Fetch a project collection by name.

    Args:
        session: HTTP client session
        server_url: Server (account) URL
        collection_name: Name of the collection

    Returns:
        Collection if found, None if the server answered 404
    """
    url = append_path_segment(
        server_url, f"_apis/projectCollections/{quote(collection_name)}"
    )
    async with session.get(url, params=API_VERSION) as resp:
        if resp.status == 404:
            return None
        resp.raise_for_status()
        body = await resp.json()
    return Collection.model_validate(body)


async def get_team_project(
    session: ClientSession, collection_url: str, project_name: Optional[str]
) -> Optional[Project]:
    """Fetch a team project from a collection.

    Args:
        session: HTTP client session
        collection_url: Canonical collection URL
        project_name: Project name, possibly unknown

    Returns:
        Project if found, None if no name is known or the server answered 404
    """
    if not project_name:
        logger.debug("No team project name known for '%s'", collection_url)
        return None

    url = append_path_segment(collection_url, f"_apis/projects/{quote(project_name)}")
    async with session.get(url, params=API_VERSION) as resp:
        if resp.status == 404:
            return None
        resp.raise_for_status()
        body = await resp.json()
    return Project.model_validate(body)
