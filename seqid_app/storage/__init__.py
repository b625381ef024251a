"""
Blob storage module for application state.

This module implements the Strategy Pattern for pluggable persistence.
The core only needs get/set of named JSON blobs, so any key-value
backend can hold the users, records and analytics documents.
"""

from .strategies import BlobStorageStrategy, InMemoryBlobStorage, SQLBlobStorage, RedisBlobStorage
from .factory import StorageFactory, StorageBackend

__all__ = [
    "BlobStorageStrategy",
    "InMemoryBlobStorage",
    "SQLBlobStorage",
    "RedisBlobStorage",
    "StorageFactory",
    "StorageBackend",
]
