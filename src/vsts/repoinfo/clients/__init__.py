"""
Server Clients

Thin async clients for the endpoints the resolver depends on. Every call takes
the caller's aiohttp ClientSession, which carries credentials and timeouts.

Key Components:
- teamservices.py: Collection URL validation and hosted repository metadata
- core.py: REST lookups for project collections and team projects
- catalog.py: Legacy SOAP catalog service lookups for project collections

Error conventions:
- A semantic "not found" (HTTP 404, or no matching catalog entry) is a normal
  return value: False or None
- Any other failure raises aiohttp.ClientError and is left for the caller
"""
