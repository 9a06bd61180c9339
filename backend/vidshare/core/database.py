import asyncio
import logging
from typing import AsyncGenerator, Awaitable, Callable, Generic, Optional, TypeVar

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from .config import settings
from .exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConnectionCache(Generic[T]):
    """Process-wide holder for a single database handle.

    Concurrent callers of :meth:`acquire` share one in-flight connection
    attempt. A failed attempt is discarded so the next caller starts over;
    a successful handle is kept until :meth:`reset`.
    """

    def __init__(self, connect: Callable[[], Awaitable[T]], timeout: Optional[float] = None) -> None:
        self._connect = connect
        self._timeout = timeout
        self._handle: Optional[T] = None
        self._pending: Optional[asyncio.Future] = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> T:
        if self._handle is not None:
            return self._handle

        async with self._lock:
            if self._handle is not None:
                return self._handle
            if self._pending is None:
                self._pending = asyncio.ensure_future(self._establish())
            pending = self._pending

        # shield: a cancelled caller must not cancel the attempt other callers await
        return await asyncio.shield(pending)

    async def _establish(self) -> T:
        # After reset() this attempt is stale and must not touch the shared slots.
        task = asyncio.current_task()
        try:
            if self._timeout is not None:
                handle = await asyncio.wait_for(self._connect(), timeout=self._timeout)
            else:
                handle = await self._connect()
        except asyncio.CancelledError:
            if self._pending is task:
                self._pending = None
            raise
        except Exception as exc:
            if self._pending is task:
                self._pending = None
            logger.error("MongoDB connection error: %r", exc)
            raise DatabaseConnectionError() from exc

        if self._pending is task:
            self._handle = handle
            self._pending = None
        return handle

    def reset(self) -> None:
        self._handle = None
        self._pending = None


async def prepare_collections(db: AsyncIOMotorDatabase) -> None:
    await db[settings.users_collection].create_index([("email", ASCENDING)], unique=True)


async def connect_to_mongo() -> AsyncIOMotorDatabase:
    client = AsyncIOMotorClient(
        settings.mongo_uri,
        maxPoolSize=settings.mongo_max_pool_size,
        serverSelectionTimeoutMS=int(settings.mongo_connect_timeout_seconds * 1000),
    )
    try:
        await client.admin.command("ping")
        db = client[settings.mongo_db]
        await prepare_collections(db)
    except BaseException:
        # includes the cancellation wait_for delivers on timeout
        client.close()
        raise
    logger.info("Connected to MongoDB database %s", settings.mongo_db)
    return db


connection_cache: ConnectionCache[AsyncIOMotorDatabase] = ConnectionCache(
    connect_to_mongo, timeout=settings.mongo_connect_timeout_seconds
)


def get_connection_cache() -> ConnectionCache:
    return connection_cache


async def get_database(
    cache: ConnectionCache = Depends(get_connection_cache),
) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    yield await cache.acquire()
