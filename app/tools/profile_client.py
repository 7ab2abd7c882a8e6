"""Hosted auth / profile backend client (Supabase).

The service only needs three things from the backend: resolve the current
session from a bearer token, fetch a profile by user id, and update it.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from app.config import get_settings
from app.models.errors import ProfileBackendError
from app.models.response_models import UserProfile

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
PROFILE_FIELDS = ("name", "education", "experience", "goals", "skills")


class ProfileClient:
    """Thin wrapper over the Supabase auth + ``profiles`` table APIs."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_session(self, access_token: str) -> str:
        """Return the user id the *access_token* belongs to."""
        try:
            resp = self._client.auth.get_user(access_token)
        except Exception as exc:
            logger.warning("Session lookup failed: %s", exc)
            raise ProfileBackendError("Invalid or expired session", status_code=401) from exc

        user = getattr(resp, "user", None)
        if user is None or not getattr(user, "id", None):
            raise ProfileBackendError("Invalid or expired session", status_code=401)
        return str(user.id)

    def fetch_profile(self, user_id: str) -> Optional[UserProfile]:
        """Return the stored profile, or None when the user has none yet."""
        try:
            resp = (
                self._client.table(PROFILES_TABLE)
                .select("*")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            logger.error("Profile fetch failed for %s: %s", user_id, exc)
            raise ProfileBackendError("Could not load your profile") from exc

        rows = resp.data or []
        if not rows:
            return None
        return self._to_profile(rows[0])

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> UserProfile:
        """Update the given profile fields and return the stored record."""
        changes = {k: v for k, v in fields.items() if k in PROFILE_FIELDS and v is not None}
        if not changes:
            current = self.fetch_profile(user_id)
            return current or UserProfile(id=user_id)

        try:
            resp = (
                self._client.table(PROFILES_TABLE)
                .update(changes)
                .eq("id", user_id)
                .execute()
            )
        except Exception as exc:
            logger.error("Profile update failed for %s: %s", user_id, exc)
            raise ProfileBackendError("Could not update your profile") from exc

        rows = resp.data or []
        logger.info("Profile updated: user=%s fields=%s", user_id, sorted(changes))
        if rows:
            return self._to_profile(rows[0])
        return UserProfile(id=user_id, **changes)

    @staticmethod
    def _to_profile(row: dict[str, Any]) -> UserProfile:
        skills = row.get("skills") or []
        if isinstance(skills, str):
            skills = [s.strip() for s in skills.split(",") if s.strip()]
        return UserProfile(
            id=str(row.get("id", "")),
            name=row.get("name"),
            education=row.get("education"),
            experience=row.get("experience"),
            goals=row.get("goals"),
            skills=list(skills),
        )


# Module-level singleton
_client: Optional[ProfileClient] = None


def get_profile_client() -> Optional[ProfileClient]:
    """Return the singleton ProfileClient, or None when Supabase is not configured."""
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            return None
        _client = ProfileClient(create_client(settings.supabase_url, settings.supabase_key))
    return _client
