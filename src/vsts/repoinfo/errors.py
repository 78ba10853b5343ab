"""Resolution failures.

Every error message carries a stable code plus the stage, URL and collection
name involved so a failure can be traced to the exact hypothesis that was
tried. Transport failures are aiohttp.ClientError instances and are never
wrapped by these classes.
"""

from typing import Optional


class RepositoryInfoException(Exception):
    """Base class for repository identity resolution failures."""


class ValidationFailedException(RepositoryInfoException):
    """
    No addressing hypothesis produced a valid collection endpoint.
    """

    @staticmethod
    def team_services(collection_name: str, url: str) -> "ValidationFailedException":
        """The account URL of a Team Services remote did not validate."""
        return ValidationFailedException(
            "error-repoinfo-1000 Unable to validate the Team Services TFVC repository."
            f" Collection name: '{collection_name}', Url: '{url}'"
        )

    @staticmethod
    def no_account(url: str) -> "ValidationFailedException":
        """No Team Services account name can be derived from the remote URL."""
        return ValidationFailedException(
            f"error-repoinfo-1002 Unable to derive a Team Services account from Url: '{url}'"
        )

    @staticmethod
    def default_collection(url: str) -> "ValidationFailedException":
        """Neither the literal URL nor the DefaultCollection URL validated."""
        return ValidationFailedException(
            "error-repoinfo-1001 Unable to validate the TFVC repository with"
            f" DefaultCollection. Url: '{url}'"
        )


class CollectionNotFoundException(RepositoryInfoException):
    """
    The server did not return a project collection object.
    """

    @staticmethod
    def soap(collection_name: str, server_url: str) -> "CollectionNotFoundException":
        return CollectionNotFoundException(
            "error-repoinfo-1100 Using SOAP, could not find a project collection"
            f" object for '{collection_name}' at '{server_url}'"
        )

    @staticmethod
    def rest(collection_name: str, server_url: str) -> "CollectionNotFoundException":
        return CollectionNotFoundException(
            "error-repoinfo-1101 Using REST, could not find a project collection"
            f" object for '{collection_name}' at '{server_url}'"
        )


class ProjectNotFoundException(RepositoryInfoException):
    """
    The team project could not be found in the resolved collection.
    """

    @staticmethod
    def missing(
        project_name: Optional[str], collection_url: str
    ) -> "ProjectNotFoundException":
        if not project_name:
            return ProjectNotFoundException(
                "error-repoinfo-1201 No team project name known for collection"
                f" '{collection_url}'"
            )
        return ProjectNotFoundException(
            f"error-repoinfo-1200 Could not find team project '{project_name}'"
            f" in collection '{collection_url}'"
        )


class UnsupportedRepositoryTypeException(RepositoryInfoException):
    @staticmethod
    def for_type(repository_type: object) -> "UnsupportedRepositoryTypeException":
        return UnsupportedRepositoryTypeException(
            f"error-repoinfo-1300 Unsupported repository type: {repository_type!r}"
        )
