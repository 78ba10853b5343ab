"""
Identity Models

This package defines the typed records produced by a resolution. They replace
the loosely typed JSON blobs the server APIs return, while still reading and
writing the exact camelCase wire shape downstream consumers expect.

Key Models:
- identity.py: ServerAddress, Collection, Project, RepositoryIdentity and
  ResolvedRepository

A RepositoryIdentity is either fully populated or not built at all; the
resolver never returns a partial record.
"""
