from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..core.database import get_database
from ..models.video import Transformation, Video
from ..schemas.video import TransformationSchema, VideoCreate, VideoResponse
from .dependencies import get_current_user

router = APIRouter(prefix="/api/videos", tags=["videos"])


def _object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail="Invalid identifier")
    return ObjectId(value)


def _to_response(video: Video) -> VideoResponse:
    return VideoResponse(
        video_id=video.id,
        title=video.title,
        description=video.description,
        video_url=video.video_url,
        thumbnail_url=video.thumbnail_url,
        controls=video.controls,
        transformation=TransformationSchema(
            width=video.transformation.width,
            height=video.transformation.height,
            quality=video.transformation.quality,
        ),
        owner_id=video.owner_id,
        created_at=video.created_at,
        updated_at=video.updated_at,
    )


@router.post("", response_model=VideoResponse, status_code=201)
async def create_video(
    payload: VideoCreate,
    db=Depends(get_database),
    user: Dict[str, Any] = Depends(get_current_user),
):
    created_at = datetime.utcnow()
    video = Video(
        title=payload.title,
        description=payload.description,
        video_url=payload.video_url,
        thumbnail_url=payload.thumbnail_url,
        controls=payload.controls,
        transformation=Transformation(**payload.transformation.model_dump()),
        owner_id=user["id"],
        created_at=created_at,
        updated_at=created_at,
    )
    result = await db[settings.videos_collection].insert_one(video.to_document())
    video.id = str(result.inserted_id)
    return _to_response(video)


@router.get("", response_model=List[VideoResponse])
async def list_videos(db=Depends(get_database)):
    cursor = db[settings.videos_collection].find({}, sort=[("created_at", -1)])
    videos: List[VideoResponse] = []
    async for doc in cursor:
        videos.append(_to_response(Video.from_document(doc)))
    return videos


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: str, db=Depends(get_database)):
    oid = _object_id(video_id)
    doc = await db[settings.videos_collection].find_one({"_id": oid})
    if not doc:
        raise HTTPException(status_code=404, detail="Video not found")
    return _to_response(Video.from_document(doc))
