"""Explicit per-request session context.

Instead of ambient "current user" state, routers resolve a SessionContext
from the request's bearer token and hand it to the orchestrators.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from app.models.errors import ProfileBackendError
from app.models.response_models import UserProfile
from app.tools.profile_client import ProfileClient

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"


class SessionContext(BaseModel):
    """Who is calling, and their profile when the backend has one."""

    user_id: str = ANONYMOUS_USER
    access_token: Optional[str] = None
    profile: Optional[UserProfile] = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id == ANONYMOUS_USER

    def profile_fields(self) -> dict[str, str]:
        """Profile values flattened to prompt fields (empty when unknown)."""
        if self.profile is None:
            return {}
        return {
            "name": self.profile.name or "",
            "education": self.profile.education or "",
            "experience": self.profile.experience or "",
            "goals": self.profile.goals or "",
            "skills": ", ".join(self.profile.skills),
        }


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_session(
    authorization: Optional[str],
    client: Optional[ProfileClient],
    load_profile: bool = False,
) -> SessionContext:
    """Build the SessionContext for one request.

    Without a configured backend every caller is anonymous.  With one, a
    valid bearer token is required.
    """
    if client is None:
        logger.debug("Auth backend not configured — anonymous session")
        return SessionContext()

    token = _bearer_token(authorization)
    if token is None:
        raise ProfileBackendError("Sign in required", status_code=401)

    user_id = client.get_session(token)
    profile = client.fetch_profile(user_id) if load_profile else None
    return SessionContext(user_id=user_id, access_token=token, profile=profile)
