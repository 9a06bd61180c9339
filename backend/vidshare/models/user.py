from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(slots=True)
class User:
    email: str
    password: str  # bcrypt hash once persisted
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=str(doc["_id"]),
            email=doc["email"],
            password=doc["password"],
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "password": self.password,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(slots=True, frozen=True)
class Identity:
    id: str
    email: str
