"""
RepoInfo - Repository Server Identity Resolution

This package resolves the canonical server identity of a version-controlled
workspace: the server URL, project collection, team project and repository
that downstream tooling needs in order to talk to the right endpoint.

Key Components:
- context: Repository kind and the remote descriptor supplied by the caller
- urls: Pure URL predicates and decomposition helpers
- model: Typed identity records returned to callers
- clients: Thin HTTP clients for the REST and legacy SOAP endpoints
- resolve: The resolution state machine and its command line interface

Backend Families:
1. Team Services (hosted)
   - Uniform {account}.visualstudio.com addressing
   - Always addressed over REST

2. Team Foundation Server (on-premises) and external TFVC remotes
   - Server + collection addressing that must be discovered
   - Collection lookups use the SOAP catalog service, since the REST
     administrative endpoints are commonly forbidden for non-administrators

Resolution is strictly sequential: each validation or fetch gates the next,
and any transport failure is terminal for that resolution. Credentials are
carried by the caller's aiohttp session; nothing here authenticates, caches
or retries.
"""
