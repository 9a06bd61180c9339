from typing import Optional

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    # Presence is checked by the handlers so a missing field yields a 400, not a 422.
    email: Optional[str] = None
    password: Optional[str] = None


class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None


class SessionResponse(BaseModel):
    user: SessionUser
    expires: int


class LoginResponse(SessionResponse):
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str


class MediaAuthResponse(BaseModel):
    token: str
    expire: int
    signature: str
