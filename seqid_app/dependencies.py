"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the blob storage and the
clock, and resolves the caller's identity from request headers.

Pattern: Dependency Injection
- Tests override get_storage/get_clock with in-memory/fixed versions
- Backends are swapped via config, not code
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from seqid_app.config import settings
from seqid_app.core.clock import Clock
from seqid_app.exceptions import PermissionDenied
from seqid_app.services.identity import format_user_id, is_admin, verify_admin_password
from seqid_app.storage.factory import StorageFactory, StorageBackend
from seqid_app.storage.strategies import BlobStorageStrategy


@lru_cache()
def get_storage() -> BlobStorageStrategy:
    """
    Get blob storage instance (singleton).
    
    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.
    """
    backend = StorageBackend(settings.storage_backend)
    return StorageFactory.create(backend)


@lru_cache()
def get_clock() -> Clock:
    """Get the clock (singleton) in the configured timezone"""
    return Clock(settings.timezone)


def get_processor_service(
    storage: BlobStorageStrategy = Depends(get_storage),
    clock: Clock = Depends(get_clock)
):
    """
    Get ProcessorService with all dependencies injected.
    
    Controllers depend on the service; the service depends on
    infrastructure (storage, clock).
    """
    from seqid_app.services.processor_service import ProcessorService
    return ProcessorService(storage=storage, clock=clock)


def get_current_user(x_user_id: str = Header(..., description="Logged-in user ID")) -> str:
    """Identity of the caller, as supplied by the session layer"""
    return format_user_id(x_user_id)


def require_admin(
    user_id: str = Depends(get_current_user),
    x_admin_password: Optional[str] = Header(None)
) -> str:
    """Admin routes need the admin user id and the shared secret"""
    if not is_admin(user_id) or not verify_admin_password(x_admin_password):
        raise PermissionDenied()
    return user_id
