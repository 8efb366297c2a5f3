"""
Request owner resolution.

There is no authentication: the client identifies the person it is
calculating for with X-User-Mobile (and optionally X-User-Name). The mobile
number is only the partition key for history ownership.
"""

from typing import Optional

from fastapi import Header

from .schemas import UserProfile


def get_current_user(
    x_user_mobile: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
) -> Optional[UserProfile]:
    """FastAPI dependency. Returns the caller's UserProfile, or None when anonymous."""
    mobile = (x_user_mobile or "").strip()
    if not mobile:
        return None
    return UserProfile(mobile=mobile, name=(x_user_name or "").strip(), is_logged_in=True)


def owner_key(user: Optional[UserProfile]) -> Optional[str]:
    return user.mobile if user else None
