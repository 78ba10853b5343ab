"""Repository descriptor supplied by the caller at the start of a resolution.

The descriptor is immutable. When a resolution corrects the remote URL, the
correction is reported on the result instead of being written back here.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RepositoryType(IntEnum):
    """Version control kind of a workspace.

    GIT repositories live on the hosted service. TFVC and EXTERNAL remotes
    use server + collection addressing and share one resolution path.
    """

    GIT = 1
    TFVC = 2
    EXTERNAL = 3


class RepositoryContext(BaseModel):
    """Remote address of a repository.

    team_project_name is discovered by an external tool (tf.cmd for TFVC)
    before resolution starts and may be missing.
    """

    model_config = ConfigDict(frozen=True)

    type: RepositoryType
    remote_url: str
    team_project_name: Optional[str] = None


def is_centralized(repository_type: RepositoryType) -> bool:
    return repository_type in (RepositoryType.TFVC, RepositoryType.EXTERNAL)


def parse_repository_type(value: str) -> RepositoryType:
    """Parse a repository kind from user input.

    Args:
        value: Kind name such as "git", "tfvc" or "external"

    Returns:
        The matching RepositoryType

    Raises:
        ValueError: If the name is not a known repository kind
    """
    name = value.strip().upper()
    try:
        return RepositoryType[name]
    except KeyError:
        raise ValueError(f"Unknown repository type: {value!r}") from None
