"""
Repository Resolution

This package resolves a repository's remote URL to the canonical identity of
the server, collection and team project behind it.

Key Components:
- repository.py: Resolution state machine
- __main__.py: CLI interface for resolution

Resolution Types:
1. Git repositories
   - The server describes the repository through its vsts/info endpoint

2. TFVC and external repositories, first validated hypothesis wins:
   - Team Services account: https://{account}.visualstudio.com/ is the only
     candidate, and failing it fails the resolution
   - Literal collection URL: the URL as given, split into server and collection
   - Default collection: the URL as a server URL plus DefaultCollection, in
     which case the corrected remote URL is reported back to the caller

Once the address is known, the collection is fetched over REST for Team
Services and over the SOAP catalog service otherwise, then the team project
is fetched and the identity assembled.
"""
