from typing import Any, Mapping, Optional

AUTH_PREFIXES = ("/api/auth", "/login", "/register")
PUBLIC_PREFIXES = ("/api/videos",)
PUBLIC_PATHS = ("/",)

# Never run through the session check.
EXCLUDED_PREFIXES = ("/health", "/static", "/docs", "/redoc", "/openapi.json", "/favicon.ico")


def is_excluded(path: str) -> bool:
    return path.startswith(EXCLUDED_PREFIXES)


def is_authorized(path: str, token: Optional[Mapping[str, Any]]) -> bool:
    """Decide whether a request for ``path`` may proceed.

    Authentication routes and public pages stay reachable without a session;
    everything else needs a valid session token.
    """
    if path.startswith(AUTH_PREFIXES):
        return True

    if path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return True

    return bool(token)
