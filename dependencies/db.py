# dependencies/db.py
from fastapi import Depends
from minio import Minio
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Annotated

from db.db import get_db, get_object_storage

DB = Annotated[AsyncIOMotorDatabase, Depends(get_db)]
ObjectStorage = Annotated[Minio, Depends(get_object_storage)]
