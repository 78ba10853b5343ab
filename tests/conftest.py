"""
Shared test configuration and fixtures for repoinfo tests.

Provides mocked aiohttp sessions used across client and resolver tests.
"""

from typing import Callable, Dict, Tuple
from unittest.mock import AsyncMock

import pytest
from aiohttp import ClientResponse, ClientSession

from tests.test_helpers import as_context_manager, create_mock_response


@pytest.fixture
def mock_session() -> ClientSession:
    """Create a mock aiohttp ClientSession."""
    return AsyncMock(spec=ClientSession)


@pytest.fixture
def route_session() -> Callable[[Dict[Tuple[str, str], ClientResponse]], ClientSession]:
    """Create a mock session that answers requests by (method, url).

    Unknown routes answer 404.
    """

    def _route(routes: Dict[Tuple[str, str], ClientResponse]) -> ClientSession:
        session = AsyncMock(spec=ClientSession)

        def _handler(method: str):
            def _request(url, **kwargs):
                response = routes.get((method, url), create_mock_response(404))
                return as_context_manager(response)

            return _request

        session.get.side_effect = _handler("GET")
        session.post.side_effect = _handler("POST")
        return session

    return _route
