# centralizes MongoDB utilities
from bson import ObjectId
from bson.errors import InvalidId
from typing import Annotated
from pydantic import Field
from typing import Dict, Any, Optional

PyObjectId = Annotated[str, Field(default_factory=lambda: str(ObjectId()))]

# Helper functions for MongoDB operations
def convert_to_object_id(id_value: str) -> Optional[ObjectId]:
    """Convert string ID to ObjectId for MongoDB queries, None if it is not a valid id"""
    if isinstance(id_value, ObjectId):
        return id_value
    try:
        return ObjectId(id_value)
    except (InvalidId, TypeError):
        return None

def overwrite_mongodb_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert MongoDB _id to string id for API responses"""
    if document and "_id" in document:
        document["id"] = str(document["_id"])
        del document["_id"]
    return document
