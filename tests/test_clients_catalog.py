"""
Unit tests for the SOAP catalog client in vsts.repoinfo.clients.catalog

Tests cover envelope construction, QueryNodes response parsing and the
two-step collection lookup.
"""

from xml.etree import ElementTree

import pytest
from aiohttp import ClientResponseError

from vsts.repoinfo.clients.catalog import (
    CATALOG_SERVICE_PATH,
    PROJECT_COLLECTION,
    QUERY_NODES_ACTION,
    TEAM_FOUNDATION_SERVER_INSTANCE,
    build_query_nodes_envelope,
    get_project_collection,
    parse_query_nodes_response,
)
from tests.test_helpers import (
    SERVER_NODE_PATH,
    create_mock_response,
    project_collections_response,
    query_nodes_response,
    server_instance_response,
)

ENDPOINT = f"https://tfsserver/tfs/{CATALOG_SERVICE_PATH}"


class TestEnvelope:
    def test_envelope_is_well_formed(self):
        envelope = build_query_nodes_envelope("3eYRYkJOok6GHrKam0AcAA==*", PROJECT_COLLECTION, 1)

        root = ElementTree.fromstring(envelope)
        ns = "{http://microsoft.com/webservices/}"
        query = next(root.iter(f"{ns}QueryNodes"))
        assert query.findtext(f"{ns}pathSpecs/{ns}string") == "3eYRYkJOok6GHrKam0AcAA==*"
        assert query.findtext(f"{ns}resourceTypeFilters/{ns}guid") == PROJECT_COLLECTION
        assert query.findtext(f"{ns}queryOptions") == "1"

    def test_envelope_escapes_path(self):
        envelope = build_query_nodes_envelope("a<b&c", PROJECT_COLLECTION, 0)

        assert "a&lt;b&amp;c" in envelope
        ElementTree.fromstring(envelope)


class TestParseQueryNodesResponse:
    def test_parse_server_instance(self):
        data = parse_query_nodes_response(server_instance_response())

        assert len(data.resources) == 1
        assert data.resources[0].display_name == "Team Foundation Server"
        assert data.resources[0].is_type(TEAM_FOUNDATION_SERVER_INSTANCE)
        nodes = data.nodes_of_type(TEAM_FOUNDATION_SERVER_INSTANCE)
        assert [node.full_path for node in nodes] == [SERVER_NODE_PATH]

    def test_parse_properties(self):
        data = parse_query_nodes_response(project_collections_response("DefaultCollection"))

        assert data.resources[0].properties == {"InstanceId": "instance-0"}

    def test_parse_empty_result(self):
        data = parse_query_nodes_response(query_nodes_response([], []))

        assert data.resources == []
        assert data.nodes == []
        assert data.nodes_of_type(PROJECT_COLLECTION) == []


class TestGetProjectCollection:
    """Test suite for the two-step SOAP collection lookup."""

    @pytest.mark.asyncio
    async def test_found(self, mock_session):
        session = mock_session
        session.post.return_value.__aenter__.side_effect = [
            create_mock_response(200, text_body=server_instance_response()),
            create_mock_response(
                200, text_body=project_collections_response("Other", "DefaultCollection")
            ),
        ]

        collection = await get_project_collection(
            session, "https://tfsserver/tfs/", "defaultcollection"
        )

        assert collection.id == "instance-1"
        assert collection.name == "DefaultCollection"
        assert collection.url == "https://tfsserver/tfs/DefaultCollection"

        assert session.post.call_count == 2
        first, second = session.post.call_args_list
        assert first.args == (ENDPOINT,)
        assert first.kwargs["headers"]["SOAPAction"] == QUERY_NODES_ACTION
        assert "3eYRYkJOok6GHrKam0AcAA==*" in first.kwargs["data"]
        assert TEAM_FOUNDATION_SERVER_INSTANCE in first.kwargs["data"]
        assert f"{SERVER_NODE_PATH}*" in second.kwargs["data"]
        assert PROJECT_COLLECTION in second.kwargs["data"]

    @pytest.mark.asyncio
    async def test_collection_missing(self, mock_session):
        session = mock_session
        session.post.return_value.__aenter__.side_effect = [
            create_mock_response(200, text_body=server_instance_response()),
            create_mock_response(200, text_body=project_collections_response("Other")),
        ]

        collection = await get_project_collection(
            session, "https://tfsserver/tfs/", "DefaultCollection"
        )

        assert collection is None

    @pytest.mark.asyncio
    async def test_server_instance_missing(self, mock_session):
        mock_session.post.return_value.__aenter__.return_value = create_mock_response(
            200, text_body=query_nodes_response([], [])
        )

        collection = await get_project_collection(
            mock_session, "https://tfsserver/tfs/", "DefaultCollection"
        )

        assert collection is None
        assert mock_session.post.call_count == 1

    @pytest.mark.asyncio
    async def test_soap_fault_raises(self, route_session):
        session = route_session({("POST", ENDPOINT): create_mock_response(500)})

        with pytest.raises(ClientResponseError):
            await get_project_collection(session, "https://tfsserver/tfs", "DefaultCollection")
