import asyncio
from typing import Optional, Tuple

from fastapi import HTTPException, status
from minio import Minio
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import (
    DATABASE_URL,
    DATABASE_NAME,
    DB_MAX_POOL_SIZE,
    DB_MAX_RECONNECT_ATTEMPTS,
    DB_RECONNECT_DELAY,
    DB_SERVER_SELECTION_TIMEOUT_MS,
    DB_CONNECT_TIMEOUT_MS,
    MINIO_USERNAME,
    MINIO_PASSWORD,
    MINIO_SERVER,
    MINIO_BUCKET,
)
from logger.logger import logger

# Process wide handles, created on startup and reused by every request
client: Optional[AsyncIOMotorClient] = None
db: Optional[AsyncIOMotorDatabase] = None
minio_client: Optional[Minio] = None

def _create_client() -> AsyncIOMotorClient:
    # tz_aware so stored message timestamps compare as UTC
    return AsyncIOMotorClient(
        DATABASE_URL,
        maxPoolSize=DB_MAX_POOL_SIZE,
        serverSelectionTimeoutMS=DB_SERVER_SELECTION_TIMEOUT_MS,
        connectTimeoutMS=DB_CONNECT_TIMEOUT_MS,
        retryWrites=True,
        retryReads=True,
        tz_aware=True,
    )

async def init_db() -> None:
    """Connect to MongoDB, retrying a few times before giving up"""
    global client, db

    for attempt in range(1, DB_MAX_RECONNECT_ATTEMPTS + 1):
        try:
            if client is None:
                client = _create_client()
                db = client[DATABASE_NAME]
            await client.admin.command('ping')
            logger.info(f"Connected to MongoDB database '{DATABASE_NAME}'")
            return
        except Exception as e:
            logger.error(f"MongoDB connection attempt {attempt}/{DB_MAX_RECONNECT_ATTEMPTS} failed: {e}")
            if attempt < DB_MAX_RECONNECT_ATTEMPTS:
                await asyncio.sleep(DB_RECONNECT_DELAY)

    logger.error("Giving up on MongoDB; requests will get 503 until it is reachable")

async def get_db() -> AsyncIOMotorDatabase:
    """Database handle for FastAPI Depends()"""
    if db is None:
        await init_db()
    if db is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service unavailable"
        )
    return db

async def close_db_connection() -> None:
    global client, db
    if client is not None:
        client.close()
        client = None
        db = None
        logger.info("MongoDB connection closed")

def _storage_endpoint(server: str) -> Tuple[str, bool]:
    """Split a MinIO server setting into the bare host:port and whether to use TLS"""
    for scheme, secure in (("https://", True), ("http://", False)):
        if server.startswith(scheme):
            return server[len(scheme):].rstrip("/"), secure
    return server.rstrip("/"), False

async def init_object_storage() -> None:
    """Connect to MinIO and create the upload bucket on first run"""
    global minio_client

    endpoint, secure = _storage_endpoint(MINIO_SERVER)
    minio_client = Minio(
        endpoint,
        access_key=MINIO_USERNAME,
        secret_key=MINIO_PASSWORD,
        secure=secure
    )

    if minio_client.bucket_exists(MINIO_BUCKET):
        logger.info(f"Using bucket '{MINIO_BUCKET}' on {endpoint}")
    else:
        minio_client.make_bucket(MINIO_BUCKET)
        logger.info(f"Created bucket '{MINIO_BUCKET}' on {endpoint}")

async def get_object_storage() -> Minio:
    """MinIO client for FastAPI Depends()"""
    if minio_client is None:
        await init_object_storage()
    if minio_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Object storage service unavailable"
        )
    return minio_client
