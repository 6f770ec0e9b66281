"""
MongoDB access for the storefront.

`db` is None when DATABASE_URL / DATABASE_NAME are not configured; callers
check for that and report the database as unavailable.
"""
import os
from datetime import datetime, timezone
from typing import Union

from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument

from errors import UpstreamError

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME")

COUNTERS = "counters"


def ensure_indexes(database) -> None:
    database["cart"].create_index([("userId", ASCENDING)], unique=True)
    database["order"].create_index([("orderId", ASCENDING)], unique=True)
    database["order"].create_index([("userId", ASCENDING), ("created_at", DESCENDING)])
    database["enquiry"].create_index([("status", ASCENDING), ("created_at", DESCENDING)])
    database["enquiry"].create_index([("email", ASCENDING)])
    database["sawamani"].create_index([("phoneNumber", ASCENDING)])
    database["sawamani"].create_index([("date", ASCENDING)])
    database["sawamani"].create_index([("created_at", DESCENDING)])


db = None
if DATABASE_URL and DATABASE_NAME:
    _client = MongoClient(DATABASE_URL)
    db = _client[DATABASE_NAME]
    ensure_indexes(db)


def require_db():
    if db is None:
        raise UpstreamError("Database not available")
    return db


def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert one document stamped with created_at/updated_at and return its id."""
    database = require_db()
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = dict(data)
    now = datetime.now(timezone.utc)
    data_dict["created_at"] = now
    data_dict["updated_at"] = now
    result = database[collection_name].insert_one(data_dict)
    return str(result.inserted_id)


def next_sequence(name: str) -> int:
    """Atomically increment and return the named counter, starting at 1.

    The increment happens server-side in a single document update, so two
    concurrent callers can never observe the same value.
    """
    database = require_db()
    doc = database[COUNTERS].find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(doc["seq"])
