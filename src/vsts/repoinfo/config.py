"""
Configuration Module for RepoInfo

Settings are loaded from environment variables through pydantic-settings,
with defaults suitable for interactive use. The resolver itself takes no
settings: everything environment specific (credentials, timeouts, headers)
is folded into the aiohttp ClientSession that callers hand to it.
"""

import logging
from typing import Optional

import aiohttp
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Settings for the repoinfo command line tools.

    Environment variables map to fields by name. The access token can be set
    with either PAT or AZURE_DEVOPS_PAT.
    """

    debug: bool = False
    """
    Enable verbose logging.
    Set with DEBUG=true environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    personal_access_token: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "personal_access_token", "pat", "azure_devops_pat"
        ),
    )
    """
    Personal access token sent as basic auth credentials on every request.
    Set with PAT or AZURE_DEVOPS_PAT environment variables.
    """

    user_agent: str = "vsts-repoinfo"
    """
    User-Agent header for requests to the server.
    Set with USER_AGENT environment variable.
    """

    request_timeout: float = 30.0
    """
    Total timeout in seconds for each HTTP request.
    Set with REQUEST_TIMEOUT environment variable.
    """


def create_client_session(settings: Settings) -> aiohttp.ClientSession:
    """Create the shared HTTP session used by every client call.

    The session is the transport and authentication handler for all
    resolutions started from it. It is read-only once created and may be
    shared by concurrent resolutions.
    """
    auth = None
    if settings.personal_access_token:
        auth = aiohttp.BasicAuth("", settings.personal_access_token)
    else:
        logger.debug("No personal access token configured, sending anonymous requests")

    return aiohttp.ClientSession(
        auth=auth,
        headers={"User-Agent": settings.user_agent},
        timeout=aiohttp.ClientTimeout(total=settings.request_timeout),
    )
