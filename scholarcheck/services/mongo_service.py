"""
MongoDB service for loading student profiles and scholarships
"""
import logging
from typing import Any, Dict, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId

from ..config import settings
from ..database import get_database
from ..models.scholarship import Scholarship

logger = logging.getLogger(__name__)


def _id_query(document_id: str) -> Dict[str, Union[ObjectId, str]]:
    """Match on ObjectId when the id looks like one, else on the raw string"""
    try:
        return {"_id": ObjectId(document_id)}
    except (InvalidId, TypeError):
        return {"_id": document_id}


class MongoService:
    """Read-only access to the collections the eligibility checks need"""

    def __init__(self, database=None):
        self._database = database

    @property
    def db(self):
        database = self._database if self._database is not None else get_database()
        if database is None:
            raise RuntimeError("MongoDB is not connected")
        return database

    async def health_check(self) -> bool:
        """Check MongoDB connection health"""
        try:
            await self.db.client.admin.command('ping')
            return True
        except Exception as e:
            logger.warning(f"MongoDB health check failed: {e}")
            return False

    async def get_student_profile(self, student_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a student's user document

        Args:
            student_id: User document id (ObjectId hex or string id)

        Returns:
            The document with a string "_id", or None if not found. The profile
            may sit at the top level or under "studentProfile"; the engine reads both.
        """
        try:
            doc = await self.db[settings.students_collection].find_one(_id_query(student_id))
        except Exception as e:
            logger.error(f"Failed to get student {student_id}: {e}")
            raise

        if not doc:
            return None
        doc["_id"] = str(doc["_id"])
        return doc

    async def get_scholarship(self, scholarship_id: str) -> Optional[Scholarship]:
        """Get a scholarship by id"""
        try:
            doc = await self.db[settings.scholarships_collection].find_one(_id_query(scholarship_id))
        except Exception as e:
            logger.error(f"Failed to get scholarship {scholarship_id}: {e}")
            raise

        if not doc:
            return None
        return Scholarship(**doc)


# Global MongoDB service instance
mongo_service = MongoService()


def get_mongo_service() -> MongoService:
    """FastAPI dependency for the MongoDB service"""
    return mongo_service
