from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ..core.config import settings
from ..core.exceptions import ConflictError
from ..core.security import hash_password
from ..models.user import User

logger = logging.getLogger(__name__)


def prepare_user_for_persistence(
    document: Dict[str, Any], password_changed: bool, rounds: Optional[int] = None
) -> Dict[str, Any]:
    """Return a copy of ``document`` ready to be written.

    The password is hashed only when the caller says it changed in this
    write, so an already hashed value is never hashed twice.
    """
    prepared = dict(document)
    if password_changed:
        prepared["password"] = hash_password(prepared["password"], rounds or settings.bcrypt_rounds)
    now = datetime.utcnow()
    if prepared.get("created_at") is None:
        prepared["created_at"] = now
    prepared["updated_at"] = now
    return prepared


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[settings.users_collection]

    async def find_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email})
        return User.from_document(doc) if doc else None

    async def get(self, user_id: str) -> Optional[User]:
        if not ObjectId.is_valid(user_id):
            return None
        doc = await self.collection.find_one({"_id": ObjectId(user_id)})
        return User.from_document(doc) if doc else None

    async def create(self, email: str, password: str) -> User:
        doc = prepare_user_for_persistence({"email": email, "password": password}, password_changed=True)
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            logger.info("Duplicate registration attempt for %s", email)
            raise ConflictError("Email already exists") from exc
        doc["_id"] = result.inserted_id
        return User.from_document(doc)

    async def save(self, user: User, password_changed: bool = False) -> User:
        doc = prepare_user_for_persistence(user.to_document(), password_changed=password_changed)
        try:
            await self.collection.update_one({"_id": ObjectId(user.id)}, {"$set": doc})
        except DuplicateKeyError as exc:
            raise ConflictError("Email already exists") from exc
        doc["_id"] = user.id
        return User.from_document(doc)
