from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

# Portrait frame used when no transformation override is given.
VIDEO_DIMENSIONS = {"width": 1080, "height": 1920}


@dataclass(slots=True)
class Transformation:
    width: int = VIDEO_DIMENSIONS["width"]
    height: int = VIDEO_DIMENSIONS["height"]
    quality: Optional[int] = None

    def __post_init__(self) -> None:
        if self.quality is not None and not 1 <= self.quality <= 100:
            raise ValueError(f"quality must be between 1 and 100, got {self.quality}")


@dataclass(slots=True)
class Video:
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    controls: bool = True
    transformation: Transformation = field(default_factory=Transformation)
    owner_id: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Video":
        transformation = doc.get("transformation") or {}
        return cls(
            id=str(doc["_id"]),
            title=doc["title"],
            description=doc["description"],
            video_url=doc["video_url"],
            thumbnail_url=doc["thumbnail_url"],
            controls=doc.get("controls", True),
            transformation=Transformation(**transformation),
            owner_id=doc.get("owner_id"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    def to_document(self) -> Dict[str, Any]:
        doc = asdict(self)
        doc.pop("id")
        return doc
