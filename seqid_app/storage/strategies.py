"""
Blob storage strategies using Strategy Pattern.

The application keeps its whole state in three named JSON documents
(users, records, analytics). Any backend that can get and atomically
replace named blobs can hold it:
- InMemory: Testing and throwaway runs
- SQL (SQLAlchemy): SQLite for development, PostgreSQL in production
- Redis: Shared state for several API processes

Writers that read several blobs and write them back hold write_lock()
for the whole sequence. The lock is shared by every storage instance
pointing at the same backend, so workers in other processes wait too.
"""

import asyncio
import json
import time
import uuid
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from seqid_app.core.logging import get_logger
from seqid_app.database.connection import Base
from seqid_app.exceptions import StorageUnavailable
from seqid_app.models.blob import StoredBlob, WriteLease

logger = get_logger("storage")


class BlobStorageStrategy(ABC):
    """
    Abstract base class for blob storage strategies.

    Contract:
    - get() returns {} for a missing blob, and also for a corrupt one
      (bad JSON, or JSON that is not an object)
    - set_many() applies every blob or none of them
    - backend failures raise StorageUnavailable
    - write_lock() excludes every other writer on the same backend

    Backends shared between processes override _try_acquire_shared_lock
    and _release_shared_lock; the default only serializes coroutines
    of this instance.
    """

    def __init__(
        self,
        lock_ttl_seconds: float = 30.0,
        lock_wait_seconds: float = 10.0,
        lock_poll_seconds: float = 0.05,
    ):
        """
        Args:
            lock_ttl_seconds: How long a held lock stays valid if its holder dies
            lock_wait_seconds: How long write_lock() waits before giving up
            lock_poll_seconds: Pause between attempts on a busy lock
        """
        self.lock_ttl_seconds = lock_ttl_seconds
        self.lock_wait_seconds = lock_wait_seconds
        self.lock_poll_seconds = lock_poll_seconds
        self._local_lock = asyncio.Lock()

    @asynccontextmanager
    async def write_lock(self) -> AsyncIterator[None]:
        """
        Exclusive scope for a read-modify-write of the blobs.

        Coroutines of this instance queue on a local lock first, so only
        one of them polls the backend lock at a time.

        Raises:
            StorageUnavailable: Lock not obtained within lock_wait_seconds
        """
        async with self._local_lock:
            await self._acquire_shared_lock()
            try:
                yield
            finally:
                await self._release_shared_lock()

    async def _acquire_shared_lock(self) -> None:
        deadline = time.monotonic() + self.lock_wait_seconds
        while not await self._try_acquire_shared_lock():
            if time.monotonic() >= deadline:
                logger.error(f"❌ Write lock still busy after {self.lock_wait_seconds}s")
                raise StorageUnavailable("Timed out waiting for the write lock")
            await asyncio.sleep(self.lock_poll_seconds)

    async def _try_acquire_shared_lock(self) -> bool:
        """Take the backend lock without blocking; True when taken"""
        return True

    async def _release_shared_lock(self) -> None:
        """Give the backend lock back"""
        return None

    @abstractmethod
    async def get(self, name: str) -> Dict[str, Any]:
        """
        Read a blob.

        Args:
            name: Blob name

        Returns:
            Decoded blob, or an empty dict if missing or corrupt
        """
        pass

    @abstractmethod
    async def set_many(self, blobs: Dict[str, Dict[str, Any]]) -> None:
        """
        Replace several blobs in one atomic write.

        Args:
            blobs: Mapping of blob name to its new content
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable"""
        pass

    async def set(self, name: str, data: Dict[str, Any]) -> None:
        """Replace a single blob"""
        await self.set_many({name: data})

    @staticmethod
    def _decode(name: str, raw: Optional[str]) -> Dict[str, Any]:
        """Decode stored text; corrupt content degrades to an empty blob"""
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"⚠️  Corrupt blob treated as empty: {e}", extra={"blob": name})
            return {}
        if not isinstance(data, dict):
            logger.warning("⚠️  Blob is not an object, treated as empty", extra={"blob": name})
            return {}
        return data

    @staticmethod
    def _encode_all(blobs: Dict[str, Dict[str, Any]]) -> Dict[str, str]:
        """Serialize every blob up front so a bad payload aborts before any write"""
        try:
            return {name: json.dumps(data) for name, data in blobs.items()}
        except (TypeError, ValueError) as e:
            raise StorageUnavailable(f"Could not serialize blobs: {e}") from e


class InMemoryBlobStorage(BlobStorageStrategy):
    """
    In-memory storage using a Python dict.

    Blobs are kept as JSON text so every read returns a fresh copy and
    callers can never mutate stored state in place.

    Used in development/testing environments.
    Note: Async for interface consistency, but operations are instant.
    """

    def __init__(self):
        super().__init__()
        self._blobs: Dict[str, str] = {}

    async def get(self, name: str) -> Dict[str, Any]:
        return self._decode(name, self._blobs.get(name))

    async def set_many(self, blobs: Dict[str, Dict[str, Any]]) -> None:
        encoded = self._encode_all(blobs)
        self._blobs.update(encoded)

    async def ping(self) -> bool:
        return True

    def put_raw(self, name: str, raw: str) -> None:
        """Store text as-is, bypassing serialization (simulates outside writers)"""
        self._blobs[name] = raw


class SQLBlobStorage(BlobStorageStrategy):
    """
    SQLAlchemy implementation, one row per blob.

    Pros:
    - Durable with zero setup on SQLite
    - Same code runs on PostgreSQL/MySQL via database_url
    - set_many is a real transaction
    - The write lock is a lease row, so it holds across processes

    Cons:
    - Whole-document rewrite on every save
    - Not shared between hosts on SQLite
    - A busy lock is polled, not waited on

    Note: Async for interface consistency, DB calls are sync (fast).
    """

    LEASE_NAME = "blobs"

    def __init__(self, engine: Engine, **lock_options):
        """
        Initialize SQL blob storage.

        Args:
            engine: SQLAlchemy engine to store blobs in
            **lock_options: Write lock timings (see BlobStorageStrategy)
        """
        super().__init__(**lock_options)
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self._owner = uuid.uuid4().hex
        self._init_database()

    def _init_database(self):
        """Create the blobs and lease tables if they don't exist"""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Could not initialize SQL storage: {e}") from e
        logger.info("✅ SQL blob storage initialized", extra={"backend": "sql"})

    async def get(self, name: str) -> Dict[str, Any]:
        try:
            with self.session_factory() as db:
                blob = db.get(StoredBlob, name)
                raw = blob.payload if blob else None
        except SQLAlchemyError as e:
            logger.error(f"❌ SQL read error: {e}", extra={"blob": name})
            raise StorageUnavailable(f"Could not read '{name}'") from e
        return self._decode(name, raw)

    async def set_many(self, blobs: Dict[str, Dict[str, Any]]) -> None:
        encoded = self._encode_all(blobs)
        db = self.session_factory()
        try:
            for name, payload in encoded.items():
                db.merge(StoredBlob(name=name, payload=payload))

            # Single commit for all blobs
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ SQL write error: {e}")
            raise StorageUnavailable("Could not write blobs") from e
        finally:
            db.close()

    async def _try_acquire_shared_lock(self) -> bool:
        now = time.time()
        db = self.session_factory()
        try:
            # An expired lease belongs to a dead holder and is taken over
            db.query(WriteLease).filter(
                WriteLease.name == self.LEASE_NAME,
                WriteLease.expires_at < now,
            ).delete(synchronize_session=False)
            db.add(WriteLease(name=self.LEASE_NAME, owner=self._owner, expires_at=now + self.lock_ttl_seconds))
            db.commit()
            return True
        except IntegrityError:
            db.rollback()
            return False
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ SQL lease error: {e}")
            raise StorageUnavailable("Could not take the write lock") from e
        finally:
            db.close()

    async def _release_shared_lock(self) -> None:
        db = self.session_factory()
        try:
            db.query(WriteLease).filter(
                WriteLease.name == self.LEASE_NAME,
                WriteLease.owner == self._owner,
            ).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Could not release write lease, it expires in {self.lock_ttl_seconds}s: {e}")
        finally:
            db.close()

    async def ping(self) -> bool:
        try:
            with self.engine.connect():
                return True
        except SQLAlchemyError:
            return False


class RedisBlobStorage(BlobStorageStrategy):
    """
    Redis implementation, one string key per blob.

    Pros:
    - Shared by every API process pointing at the same Redis
    - MULTI/EXEC makes set_many atomic
    - The write lock is a redis-py Lock on one key

    Cons:
    - Durability depends on Redis persistence settings
    """

    def __init__(self, redis_client, key_prefix: str = "seqid:", **lock_options):
        """
        Initialize Redis blob storage.

        Args:
            redis_client: Redis client instance (redis.Redis)
            key_prefix: Prefix for every blob key
            **lock_options: Write lock timings (see BlobStorageStrategy)
        """
        super().__init__(**lock_options)
        self.redis = redis_client
        self.key_prefix = key_prefix
        self._held_lock = None

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    async def _try_acquire_shared_lock(self) -> bool:
        import redis

        lock = self.redis.lock(self._key("write-lock"), timeout=self.lock_ttl_seconds)
        try:
            acquired = lock.acquire(blocking=False)
        except redis.RedisError as e:
            logger.error(f"❌ Redis lock error: {e}")
            raise StorageUnavailable("Could not take the write lock") from e

        if acquired:
            self._held_lock = lock
        return bool(acquired)

    async def _release_shared_lock(self) -> None:
        import redis

        lock, self._held_lock = self._held_lock, None
        if lock is None:
            return
        try:
            lock.release()
        except redis.RedisError as e:
            # LockError lands here too when the lock already expired
            logger.warning(f"⚠️  Could not release write lock: {e}")

    async def get(self, name: str) -> Dict[str, Any]:
        import redis

        try:
            raw = self.redis.get(self._key(name))
        except redis.RedisError as e:
            logger.error(f"❌ Redis get error: {e}", extra={"blob": name})
            raise StorageUnavailable(f"Could not read '{name}'") from e

        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("⚠️  Blob is not UTF-8, treated as empty", extra={"blob": name})
                return {}
        return self._decode(name, raw)

    async def set_many(self, blobs: Dict[str, Dict[str, Any]]) -> None:
        import redis

        encoded = self._encode_all(blobs)
        try:
            pipe = self.redis.pipeline(transaction=True)
            for name, payload in encoded.items():
                pipe.set(self._key(name), payload)
            pipe.execute()
        except redis.RedisError as e:
            logger.error(f"❌ Redis write error: {e}")
            raise StorageUnavailable("Could not write blobs") from e

    async def ping(self) -> bool:
        import redis

        try:
            return bool(self.redis.ping())
        except redis.RedisError:
            return False
