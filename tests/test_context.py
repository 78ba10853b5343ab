"""
Unit tests for the repository descriptor in vsts.repoinfo.context
"""

import pytest
from pydantic import ValidationError

from vsts.repoinfo.context import (
    RepositoryContext,
    RepositoryType,
    is_centralized,
    parse_repository_type,
)


class TestRepositoryType:
    def test_enum_values(self):
        """Test RepositoryType enum has expected values."""
        assert RepositoryType.GIT == 1
        assert RepositoryType.TFVC == 2
        assert RepositoryType.EXTERNAL == 3

    def test_centralized_family(self):
        assert is_centralized(RepositoryType.TFVC) is True
        assert is_centralized(RepositoryType.EXTERNAL) is True
        assert is_centralized(RepositoryType.GIT) is False

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("git", RepositoryType.GIT),
            ("TFVC", RepositoryType.TFVC),
            ("  External ", RepositoryType.EXTERNAL),
        ],
    )
    def test_parse_repository_type(self, value, expected):
        assert parse_repository_type(value) == expected

    def test_parse_unknown_repository_type(self):
        with pytest.raises(ValueError):
            parse_repository_type("svn")


class TestRepositoryContext:
    def test_project_name_is_optional(self):
        context = RepositoryContext(
            type=RepositoryType.TFVC, remote_url="https://tfsserver/tfs"
        )
        assert context.team_project_name is None

    def test_context_is_immutable(self):
        context = RepositoryContext(
            type=RepositoryType.TFVC, remote_url="https://tfsserver/tfs"
        )
        with pytest.raises(ValidationError):
            context.remote_url = "https://other/tfs"
