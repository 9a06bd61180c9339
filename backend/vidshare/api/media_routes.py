import logging

from fastapi import APIRouter, HTTPException

from ..schemas.auth import MediaAuthResponse
from ..services.media_auth import get_authentication_parameters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["media"])


@router.get("/imagekit-auth", response_model=MediaAuthResponse)
async def imagekit_auth():
    try:
        return get_authentication_parameters()
    except Exception as exc:
        logger.exception("ImageKit authentication failed: %s", exc)
        raise HTTPException(status_code=500, detail="Imagekit Auth Failed") from exc
