"""
MongoDB connection for loading student profiles and scholarships
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .config import settings


class MongoDB:
    client: Optional[AsyncIOMotorClient] = None
    database: Optional[AsyncIOMotorDatabase] = None


db = MongoDB()


async def connect_to_mongo():
    """Create database connection"""
    db.client = AsyncIOMotorClient(settings.mongodb_url)
    db.database = db.client[settings.mongodb_db_name]


async def close_mongo_connection():
    """Close database connection"""
    if db.client:
        db.client.close()
    db.client = None
    db.database = None


def get_database() -> Optional[AsyncIOMotorDatabase]:
    return db.database
