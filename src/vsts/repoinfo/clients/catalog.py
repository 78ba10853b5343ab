"""Legacy SOAP catalog service client.

On-premises servers expose their topology through the catalog web service.
Unlike the REST collection endpoint, QueryNodes is open to any user with
access to the server, which makes it the only reliable way to look up a
collection for non-administrators.

Lookups walk the catalog tree in two steps:
1. Find the Team Foundation Server instance node under the organizational root
2. Find the project collection nodes under that instance and match by name
"""

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional
from xml.etree import ElementTree
from xml.sax.saxutils import escape

from aiohttp import ClientSession

from vsts.repoinfo.model.identity import Collection
from vsts.repoinfo.urls import append_path_segment

logger = logging.getLogger(__name__)

CATALOG_SERVICE_PATH = "TeamFoundation/Administration/v3.0/CatalogService.asmx"

WEBSERVICES_NAMESPACE = "http://microsoft.com/webservices/"
QUERY_NODES_ACTION = f"{WEBSERVICES_NAMESPACE}QueryNodes"

ORGANIZATIONAL_ROOT_PATH = "3eYRYkJOok6GHrKam0AcAA=="
SINGLE_RECURSE_STAR = "*"

TEAM_FOUNDATION_SERVER_INSTANCE = "B36F1BDA-DF2D-482b-993A-F194B31A1FA2"
PROJECT_COLLECTION = "26338D9E-D437-44aa-91F2-55880A328B54"

QUERY_OPTIONS_NONE = 0
QUERY_OPTIONS_EXPAND_DEPENDENCIES = 1

QUERY_NODES_ENVELOPE = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" \
xmlns:xsd="http://www.w3.org/2001/XMLSchema" \
xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <QueryNodes xmlns="http://microsoft.com/webservices/">
      <pathSpecs><string>{path_spec}</string></pathSpecs>
      <resourceTypeFilters><guid>{resource_type}</guid></resourceTypeFilters>
      <queryOptions>{query_options}</queryOptions>
    </QueryNodes>
  </soap:Body>
</soap:Envelope>"""


def _tag(name: str) -> str:
    return f"{{{WEBSERVICES_NAMESPACE}}}{name}"


@dataclass
class CatalogResource:
    identifier: str
    display_name: str
    resource_type: str
    properties: Dict[str, str] = field(default_factory=dict)

    def is_type(self, resource_type: str) -> bool:
        return self.resource_type.lower() == resource_type.lower()


@dataclass
class CatalogNode:
    full_path: str
    resource_identifier: str


@dataclass
class CatalogData:
    resources: List[CatalogResource] = field(default_factory=list)
    nodes: List[CatalogNode] = field(default_factory=list)

    def nodes_of_type(self, resource_type: str) -> List[CatalogNode]:
        identifiers = {
            resource.identifier
            for resource in self.resources
            if resource.is_type(resource_type)
        }
        return [node for node in self.nodes if node.resource_identifier in identifiers]


def build_query_nodes_envelope(
    path_spec: str, resource_type: str, query_options: int
) -> str:
    return QUERY_NODES_ENVELOPE.format(
        path_spec=escape(path_spec),
        resource_type=escape(resource_type),
        query_options=query_options,
    )


def parse_query_nodes_response(body: str) -> CatalogData:
    """Parse the QueryNodesResult of a SOAP response.

    Args:
        body: Raw SOAP response envelope

    Returns:
        CatalogData with every resource and node in the result
    """
    root = ElementTree.fromstring(body)
    data = CatalogData()

    for element in root.iter(_tag("CatalogResource")):
        properties: Dict[str, str] = {}
        for pair in element.iter(_tag("KeyValueOfStringString")):
            key = pair.findtext(_tag("Key"))
            if key is not None:
                properties[key] = pair.findtext(_tag("Value")) or ""
        data.resources.append(
            CatalogResource(
                identifier=element.get("Identifier", ""),
                display_name=element.get("DisplayName", ""),
                resource_type=element.get("ResourceTypeIdentifier", ""),
                properties=properties,
            )
        )

    for element in root.iter(_tag("CatalogNode")):
        data.nodes.append(
            CatalogNode(
                full_path=element.get("FullPath", ""),
                resource_identifier=element.get("ResourceIdentifier", ""),
            )
        )

    return data


async def query_nodes(
    session: ClientSession,
    endpoint_url: str,
    path_spec: str,
    resource_type: str,
    query_options: int,
) -> CatalogData:
    """Call QueryNodes on the catalog service.

    Raises:
        aiohttp.ClientError: If the request fails or the server returns a fault
    """
    headers = {
        "Content-Type": "text/xml; charset=utf-8",
        "SOAPAction": QUERY_NODES_ACTION,
    }
    envelope = build_query_nodes_envelope(path_spec, resource_type, query_options)
    async with session.post(endpoint_url, data=envelope, headers=headers) as resp:
        resp.raise_for_status()
        body = await resp.text()
    return parse_query_nodes_response(body)


async def get_project_collection(
    session: ClientSession, server_url: str, collection_name: str
) -> Optional[Collection]:
    """Find a project collection by name through the catalog service.

    Args:
        session: HTTP client session
        server_url: Server URL without the collection name
        collection_name: Name of the collection, compared case-insensitively

    Returns:
        Collection if the catalog contains it, None otherwise
    """
    endpoint_url = append_path_segment(server_url, CATALOG_SERVICE_PATH)

    server_data = await query_nodes(
        session,
        endpoint_url,
        ORGANIZATIONAL_ROOT_PATH + SINGLE_RECURSE_STAR,
        TEAM_FOUNDATION_SERVER_INSTANCE,
        QUERY_OPTIONS_NONE,
    )
    server_node = next(
        iter(server_data.nodes_of_type(TEAM_FOUNDATION_SERVER_INSTANCE)), None
    )
    if server_node is None:
        logger.debug("No Team Foundation Server instance node in catalog at '%s'", endpoint_url)
        return None

    collection_data = await query_nodes(
        session,
        endpoint_url,
        server_node.full_path + SINGLE_RECURSE_STAR,
        PROJECT_COLLECTION,
        QUERY_OPTIONS_EXPAND_DEPENDENCIES,
    )
    for resource in collection_data.resources:
        if not resource.is_type(PROJECT_COLLECTION):
            continue
        if resource.display_name.lower() != collection_name.lower():
            continue
        return Collection(
            id=resource.properties.get("InstanceId", resource.identifier),
            name=resource.display_name,
            url=append_path_segment(server_url, resource.display_name),
        )

    logger.debug(
        "Catalog at '%s' has no project collection named '%s'",
        endpoint_url,
        collection_name,
    )
    return None
