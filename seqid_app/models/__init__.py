"""
Database models.

The application state is three JSON documents (users, records, analytics),
kept in a name -> payload blob table. A second table holds the write lease
that serializes writers across processes.
"""

from .blob import StoredBlob, WriteLease

__all__ = ["StoredBlob", "WriteLease"]
