"""
Factory for creating blob storage instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
from .strategies import BlobStorageStrategy, InMemoryBlobStorage, SQLBlobStorage, RedisBlobStorage
from seqid_app.config import settings
from seqid_app.core.logging import get_logger

logger = get_logger("storage.factory")


class StorageBackend(Enum):
    """Available blob storage backends"""
    SQL = "sql"
    REDIS = "redis"
    MEMORY = "memory"


class StorageFactory:
    """
    Simple factory for creating blob storage instances.
    
    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """
    
    _instance: BlobStorageStrategy = None  # Single cached instance
    
    @staticmethod
    def _lock_options() -> dict:
        """Write lock timings for backends shared between processes"""
        return {
            "lock_ttl_seconds": settings.storage_lock_ttl_seconds,
            "lock_wait_seconds": settings.storage_lock_wait_seconds,
            "lock_poll_seconds": settings.storage_lock_poll_seconds,
        }
    
    @classmethod
    def create(cls, backend: StorageBackend) -> BlobStorageStrategy:
        """
        Create or return cached storage instance.
        
        Args:
            backend: Type of storage backend (from enum)
            
        Returns:
            Singleton storage instance
        """
        if cls._instance is not None:
            return cls._instance
        
        if backend == StorageBackend.SQL:
            from seqid_app.database.connection import engine
            cls._instance = SQLBlobStorage(engine, **cls._lock_options())
            
        elif backend == StorageBackend.REDIS:
            import redis
            
            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                
                # Test connection immediately
                redis_client.ping()
                
                cls._instance = RedisBlobStorage(
                    redis_client, key_prefix=settings.redis_key_prefix, **cls._lock_options()
                )
                logger.info("✅ Redis blob storage initialized", extra={"backend": "redis"})
                
            except redis.RedisError as e:
                logger.warning(f"⚠️  Redis connection failed: {e}")
                logger.warning("⚠️  Falling back to in-memory storage")
                cls._instance = InMemoryBlobStorage()
                logger.info("✅ In-memory storage initialized (fallback)", extra={"backend": "memory"})
            
        elif backend == StorageBackend.MEMORY:
            cls._instance = InMemoryBlobStorage()
            logger.info("✅ In-memory storage initialized", extra={"backend": "memory"})
            
        else:
            raise ValueError(f"Unknown storage backend: {backend}")
        
        return cls._instance
    
    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
