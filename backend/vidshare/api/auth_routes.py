import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pymongo.errors import PyMongoError

from ..core.config import settings
from ..core.database import get_database
from ..core.security import SessionSigner
from ..schemas.auth import CredentialsRequest, LoginResponse, MessageResponse, SessionUser
from ..services.auth import CredentialVerifier
from ..services.users import UserRepository
from .dependencies import get_credential_verifier, get_session_signer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(payload: CredentialsRequest, db=Depends(get_database)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    users = UserRepository(db)
    try:
        if await users.find_by_email(payload.email):
            raise HTTPException(status_code=400, detail="Email already exists")
        await users.create(payload.email, payload.password)
    except PyMongoError as exc:
        logger.exception("Failed to register %s: %s", payload.email, exc)
        raise HTTPException(status_code=500, detail="Failed to register user") from exc

    return MessageResponse(message="User registered successfully")


@router.post("/callback/credentials", response_model=LoginResponse)
async def login(
    payload: CredentialsRequest,
    response: Response,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    signer: SessionSigner = Depends(get_session_signer),
):
    identity = await verifier.authenticate(payload.email, payload.password)
    token = signer.issue({"id": identity.id, "email": identity.email})
    session = signer.verify(token)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=signer.max_age_seconds,
        httponly=True,
        samesite="lax",
    )
    return LoginResponse(
        user=SessionUser(id=identity.id, email=identity.email),
        expires=session["expires"],
        access_token=token,
    )


@router.get("/session")
async def get_session(request: Request) -> Dict[str, Any]:
    claims = getattr(request.state, "session", None)
    if not claims:
        return {}
    user = SessionUser(id=claims["id"], email=claims.get("email"))
    return {"user": user.model_dump(), "expires": claims["expires"]}


@router.post("/signout", response_model=MessageResponse)
async def signout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Signed out")
