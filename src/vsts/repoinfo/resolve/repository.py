"""Repository server identity resolution.

Turns a repository's kind and remote URL into a validated RepositoryIdentity.
Git repositories are described by the server directly. TFVC (and external)
remotes are ambiguous: the URL may name a Team Services account, a full
collection URL, or a bare server URL. These hypotheses are tried in order and
the first one the server validates wins.
"""

from enum import IntEnum
import logging
from typing import Optional, Tuple

from aiohttp import ClientSession

from vsts.repoinfo.clients.catalog import (
    get_project_collection as get_soap_project_collection,
)
from vsts.repoinfo.clients.core import (
    get_project_collection as get_rest_project_collection,
    get_team_project,
)
from vsts.repoinfo.clients.teamservices import (
    get_vsts_info,
    validate_tfvc_collection_url,
)
from vsts.repoinfo.context import RepositoryContext, RepositoryType, is_centralized
from vsts.repoinfo.errors import (
    CollectionNotFoundException,
    ProjectNotFoundException,
    UnsupportedRepositoryTypeException,
    ValidationFailedException,
)
from vsts.repoinfo.model.identity import (
    Collection,
    ResolvedRepository,
    ServerAddress,
    tfvc_repository_identity,
)
from vsts.repoinfo.urls import (
    DEFAULT_COLLECTION_NAME,
    account_from_url,
    append_path_segment,
    canonical_collection_url,
    is_team_services_url,
    split_collection_url,
    team_services_server_url,
)

logger = logging.getLogger(__name__)


class CollectionProtocol(IntEnum):
    """Protocol used to fetch the collection once the address is known."""

    REST = 1
    SOAP = 2


def select_collection_protocol(is_team_services: bool) -> CollectionProtocol:
    """Choose the collection protocol for a resolution.

    The choice is static: Team Services always answers REST, while the REST
    collection endpoint on-premises requires instance-level permissions that
    most users lack, so on-premises servers always use SOAP.
    """
    if is_team_services:
        return CollectionProtocol.REST
    return CollectionProtocol.SOAP


async def resolve_team_services_address(
    session: ClientSession, remote_url: str
) -> ServerAddress:
    """Resolve the address of a TFVC repository hosted on Team Services.

    The only collection of an account is addressed by the account name, so the
    server URL is rebuilt from the account and no other hypothesis applies.

    Raises:
        ValidationFailedException: If no account can be derived from remote_url
            or the account URL does not validate
    """
    account = account_from_url(remote_url) if is_team_services_url(remote_url) else None
    if account is None:
        raise ValidationFailedException.no_account(remote_url)
    server_url = team_services_server_url(account)

    if not await validate_tfvc_collection_url(session, server_url):
        logger.debug(
            "Unable to validate the Team Services TFVC repository. Collection name: '%s', Url: '%s'",
            account,
            server_url,
        )
        raise ValidationFailedException.team_services(account, server_url)

    logger.debug(
        "Validated the Team Services TFVC repository. Collection name: '%s', Url: '%s'",
        account,
        server_url,
    )
    return ServerAddress(server_url=server_url, collection_name=account)


async def resolve_server_address(
    session: ClientSession, remote_url: str
) -> Tuple[ServerAddress, Optional[str]]:
    """Resolve the address of an on-premises TFVC repository.

    The URL is first validated as given, as a full collection URL. If that
    fails it is assumed to be a server URL and DefaultCollection is tried.

    Args:
        session: HTTP client session
        remote_url: Remote URL as supplied by the caller

    Returns:
        Tuple of (server address, corrected remote URL). The corrected URL is
        None unless the DefaultCollection fallback was needed.

    Raises:
        ValidationFailedException: If neither URL validates
    """
    logger.debug("Validating the TFS TFVC repository collection url '%s'", remote_url)
    if await validate_tfvc_collection_url(session, remote_url):
        server_url, collection_name = split_collection_url(remote_url)
        logger.debug(
            "Validated the TFS TFVC repository. Collection name: '%s', Url: '%s'",
            collection_name,
            server_url,
        )
        return ServerAddress(server_url=server_url, collection_name=collection_name), None

    default_collection_url = append_path_segment(remote_url, DEFAULT_COLLECTION_NAME)
    logger.debug(
        "Unable to validate the TFS TFVC repository. Url: '%s' Attempting '%s'",
        remote_url,
        default_collection_url,
    )
    if not await validate_tfvc_collection_url(session, default_collection_url):
        logger.debug("Unable to validate the TFS TFVC repository with DefaultCollection")
        raise ValidationFailedException.default_collection(default_collection_url)

    logger.debug("Validated the TFS TFVC repository with DefaultCollection")
    server_url = append_path_segment(remote_url, "")
    address = ServerAddress(server_url=server_url, collection_name=DEFAULT_COLLECTION_NAME)
    return address, default_collection_url


async def fetch_collection(
    session: ClientSession, address: ServerAddress, protocol: CollectionProtocol
) -> Collection:
    """Fetch the project collection at a resolved address.

    Raises:
        CollectionNotFoundException: If the server has no such collection
    """
    logger.debug(
        "Getting project collection... url: '%s', and collection name: '%s'",
        address.server_url,
        address.collection_name,
    )
    if protocol == CollectionProtocol.REST:
        logger.debug("Using REST to get the project collection information")
        collection = await get_rest_project_collection(
            session, address.server_url, address.collection_name
        )
        if collection is None:
            raise CollectionNotFoundException.rest(
                address.collection_name, address.server_url
            )
    else:
        logger.debug("Using SOAP to get the project collection information")
        collection = await get_soap_project_collection(
            session, address.server_url, address.collection_name
        )
        if collection is None:
            logger.debug(
                "Using SOAP, could not find a project collection object for %s at %s",
                address.collection_name,
                address.server_url,
            )
            raise CollectionNotFoundException.soap(
                address.collection_name, address.server_url
            )

    logger.debug(
        "Found a project collection for url: '%s' and collection name: '%s'",
        address.server_url,
        collection.name,
    )
    return collection


async def resolve_git_repository(
    session: ClientSession, context: RepositoryContext
) -> ResolvedRepository:
    logger.debug("Getting repository information for a Git repository at %s", context.remote_url)
    identity = await get_vsts_info(session, context.remote_url)
    logger.debug(
        "Finished getting repository information for a Git repository at %s",
        context.remote_url,
    )
    return ResolvedRepository(identity=identity)


async def resolve_tfvc_repository(
    session: ClientSession, context: RepositoryContext
) -> ResolvedRepository:
    """Resolve a TFVC (or external) repository.

    The team project name comes from the context. A missing name does not stop
    address and collection resolution; it only fails the final assembly.

    Raises:
        ValidationFailedException: If no addressing hypothesis validates
        CollectionNotFoundException: If the collection cannot be fetched
        ProjectNotFoundException: If the team project cannot be found
        aiohttp.ClientError: On any transport failure
    """
    logger.debug("Getting repository information for a TFVC repository at %s", context.remote_url)

    is_team_services = is_team_services_url(context.remote_url)
    corrected_remote_url: Optional[str] = None
    if is_team_services:
        address = await resolve_team_services_address(session, context.remote_url)
    else:
        address, corrected_remote_url = await resolve_server_address(
            session, context.remote_url
        )

    protocol = select_collection_protocol(is_team_services)
    collection = await fetch_collection(session, address, protocol)

    collection_url = canonical_collection_url(
        address.server_url, collection.name, is_team_services
    )
    logger.debug(
        "Getting team project... Url: '%s', collection name: '%s', and project: '%s'",
        collection_url,
        collection.name,
        context.team_project_name,
    )
    project = await get_team_project(session, collection_url, context.team_project_name)
    if project is None:
        logger.debug(
            "No team project '%s' found in collection '%s'",
            context.team_project_name,
            collection_url,
        )
        raise ProjectNotFoundException.missing(context.team_project_name, collection_url)
    logger.debug(
        "Found a team project for url: '%s', collection name: '%s', and project id: '%s'",
        address.server_url,
        collection.name,
        project.id,
    )

    identity = tfvc_repository_identity(address.server_url, collection, project)
    logger.debug("Tfvc repository information: %s", identity.to_wire())

    # External remotes are owned by another tool, only TFVC remotes are corrected
    if context.type != RepositoryType.TFVC:
        corrected_remote_url = None

    logger.debug(
        "Finished getting repository information for a TFVC repository at %s",
        context.remote_url,
    )
    return ResolvedRepository(identity=identity, corrected_remote_url=corrected_remote_url)


async def resolve_repository_info(
    session: ClientSession, context: RepositoryContext
) -> ResolvedRepository:
    """Resolve the server identity of a repository.

    Routes to the Git or TFVC resolution based on the repository kind.

    Args:
        session: HTTP client session carrying credentials
        context: Repository kind, remote URL and optional team project name

    Returns:
        ResolvedRepository with a fully populated identity

    Raises:
        UnsupportedRepositoryTypeException: If the kind is not supported
    """
    if context.type == RepositoryType.GIT:
        return await resolve_git_repository(session, context)
    elif is_centralized(context.type):
        return await resolve_tfvc_repository(session, context)
    raise UnsupportedRepositoryTypeException.for_type(context.type)
