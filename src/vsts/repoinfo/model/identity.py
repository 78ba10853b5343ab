"""Typed identity records.

Field names are snake_case in Python and camelCase on the wire
(serverUrl, remoteUrl). Models accept either form and
``model_dump(by_alias=True)`` reproduces the wire shape exactly.
"""

from typing import Optional, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vsts.repoinfo.urls import (
    account_from_url,
    append_path_segment,
    canonical_collection_url,
    is_team_foundation_server_url,
    is_team_services_url,
)

NIL_UUID = "00000000-0000-0000-0000-000000000000"

TFVC_REPOSITORY_NAME = "NoNameTfvcRepository"

# Placeholders required by consumers of the identity record, not server values
TFVC_PROJECT_STATE = 1
TFVC_PROJECT_REVISION = 15


class ServerAddress(BaseModel):
    """Validated server endpoint.

    collection_name is never None; an unknown collection is the empty string.
    """

    server_url: str
    collection_name: str = ""


class Collection(BaseModel):
    """Project collection on a server."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str = ""


class Project(BaseModel):
    """Team project within a collection.

    Servers report state either as a number or as a name ("wellFormed"), and
    may send a null description.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    url: str = ""
    state: Union[int, str] = TFVC_PROJECT_STATE
    revision: int = 0

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v) -> str:
        return "" if v is None else v


class RepositoryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    url: str
    remote_url: str = Field(alias="remoteUrl")
    project: Project


class RepositoryIdentity(BaseModel):
    """
    Canonical server identity of a repository.

    This is the record handed to downstream tooling:

        serverUrl
        collection: {id, name, url}
        repository: {id, name, url, remoteUrl,
                     project: {id, name, description, url, state, revision}}

    The remaining properties are derived from those fields and are never
    serialized.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    server_url: str = Field(alias="serverUrl")
    collection: Collection
    repository: RepositoryRecord

    @property
    def remote_url(self) -> str:
        return self.repository.remote_url

    @property
    def is_team_services_url(self) -> bool:
        return is_team_services_url(self.remote_url)

    @property
    def is_team_foundation_server(self) -> bool:
        return is_team_foundation_server_url(self.remote_url)

    @property
    def account(self) -> Optional[str]:
        """Account name derived from the remote URL."""
        return account_from_url(self.remote_url)

    @property
    def collection_url(self) -> str:
        return canonical_collection_url(
            self.server_url, self.collection.name, self.is_team_services_url
        )

    @property
    def team_project_url(self) -> str:
        return append_path_segment(
            self.collection_url, quote(self.repository.project.name)
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ResolvedRepository(BaseModel):
    """Result of a resolution.

    corrected_remote_url is set when the given remote URL was incomplete and
    the DefaultCollection URL validated in its place. Callers that keep the
    remote URL should store the corrected value.
    """

    model_config = ConfigDict(frozen=True)

    identity: RepositoryIdentity
    corrected_remote_url: Optional[str] = None


def tfvc_repository_identity(
    server_url: str, collection: Collection, project: Project
) -> RepositoryIdentity:
    """Build the identity of a TFVC repository.

    TFVC has no repository object at this protocol level, so the repository
    fields are placeholders and its URLs mirror the server URL.

    Args:
        server_url: Resolved server URL
        collection: Collection fetched from the server
        project: Team project fetched from the collection

    Returns:
        Fully populated RepositoryIdentity
    """
    return RepositoryIdentity(
        server_url=server_url,
        collection=Collection(
            id=collection.id, name=collection.name, url=collection.url
        ),
        repository=RepositoryRecord(
            id=NIL_UUID,
            name=TFVC_REPOSITORY_NAME,
            url=server_url,
            remote_url=server_url,
            project=Project(
                id=project.id,
                name=project.name,
                description=project.description,
                url=project.url,
                state=TFVC_PROJECT_STATE,
                revision=TFVC_PROJECT_REVISION,
            ),
        ),
    )
