from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.video import VIDEO_DIMENSIONS


class TransformationSchema(BaseModel):
    width: int = Field(VIDEO_DIMENSIONS["width"], gt=0)
    height: int = Field(VIDEO_DIMENSIONS["height"], gt=0)
    quality: Optional[int] = Field(None, ge=1, le=100)


class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1, examples=["Sunset timelapse"])
    description: str = Field(..., min_length=1)
    video_url: str = Field(..., min_length=1)
    thumbnail_url: str = Field(..., min_length=1)
    controls: bool = True
    transformation: TransformationSchema = Field(default_factory=TransformationSchema)


class VideoResponse(BaseModel):
    video_id: str
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    controls: bool
    transformation: TransformationSchema
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
