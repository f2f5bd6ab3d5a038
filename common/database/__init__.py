"""
Database module - Generic async MongoDB connection using Motor.

Usage:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(uri, database_name)
    projects = db.db["projects"]
"""

from common.database.mongodb import MongoDB, mask_uri
from common.database.ids import parse_object_id, new_id

__all__ = [
    "MongoDB",
    "mask_uri",
    "parse_object_id",
    "new_id",
]
