"""JWT-backed admin session helpers.

The back office never decides on its own who is an administrator. The signed
``admin_session`` cookie carries the account id and a role claim issued by the
authentication service; this module only verifies and unpacks it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt
from fastapi import Depends, HTTPException, Request, status
from jwt import ExpiredSignatureError, InvalidTokenError

from backoffice.core.config import AuthSettings, get_settings
from backoffice.core.log import get_logger

LOGGER = get_logger(__name__)

ADMIN_ROLE = "admin"


class AuthenticationError(Exception):
    """Raised when authentication or token validation fails."""


@dataclass(frozen=True, slots=True)
class AuthenticatedAdmin:
    """Representation of the principal behind the current request."""

    account_id: int | None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class SecurityProvider:
    """Issue and verify the signed admin session token."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    @property
    def cookie_name(self) -> str:
        """Return the cookie name used for the session token."""

        return self._settings.cookie_name

    @property
    def is_enabled(self) -> bool:
        return self._settings.enabled

    def default_admin(self) -> AuthenticatedAdmin:
        return AuthenticatedAdmin(account_id=None, role=ADMIN_ROLE)

    def create_access_token(self, principal: AuthenticatedAdmin) -> str:
        """Create a signed JWT for ``principal``."""

        now = datetime.now(tz=timezone.utc)
        expires = now + timedelta(minutes=self._settings.access_token_expire_minutes)
        payload: dict[str, object] = {
            "sub": str(principal.account_id),
            "role": principal.role,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> AuthenticatedAdmin:
        """Decode a JWT and return the corresponding ``AuthenticatedAdmin``."""

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        subject = payload.get("sub")
        role = payload.get("role")
        if not isinstance(subject, str) or not isinstance(role, str):
            raise AuthenticationError("Token payload missing required claims")
        try:
            account_id = int(subject)
        except ValueError as exc:
            raise AuthenticationError("Token subject claim invalid") from exc
        return AuthenticatedAdmin(account_id=account_id, role=role)


@lru_cache(maxsize=1)
def get_security_provider() -> SecurityProvider:
    """Return a cached security provider instance."""

    return SecurityProvider(get_settings().auth)


def get_current_principal(
    request: Request,
    security: SecurityProvider = Depends(get_security_provider),
) -> AuthenticatedAdmin:
    """Resolve the principal from the session cookie."""

    if not security.is_enabled:
        return security.default_admin()
    token = request.cookies.get(security.cookie_name)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    try:
        return security.decode_token(token)
    except AuthenticationError as exc:
        LOGGER.info("Rejected admin session: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required"
        ) from exc


def require_admin(
    principal: AuthenticatedAdmin = Depends(get_current_principal),
) -> AuthenticatedAdmin:
    """Ensure the current principal has administrative privileges."""

    if not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return principal
