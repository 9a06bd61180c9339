from typing import Any, Dict

from fastapi import Depends, HTTPException, Request

from ..core.database import ConnectionCache, get_connection_cache
from ..core.security import SessionSigner
from ..services.auth import CredentialVerifier


def get_session_signer(request: Request) -> SessionSigner:
    return request.app.state.session_signer


def get_credential_verifier(cache: ConnectionCache = Depends(get_connection_cache)) -> CredentialVerifier:
    return CredentialVerifier(cache)


def get_current_user(request: Request) -> Dict[str, Any]:
    claims = getattr(request.state, "session", None)
    if not claims:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return {"id": claims["id"], "email": claims.get("email")}
