# online_store/api/deps.py
from functools import lru_cache

import requests
from fastapi import Depends, Header, HTTPException, Request

from online_store.domain.schemas import Principal
from online_store.services.comment_store import CommentStore
from online_store.services.identity_client import IdentityClient
from online_store.services.lock_service import LockService
from online_store.services.user_service import UserService
from online_store.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache
def get_lock_service() -> LockService:
    # jeden klient Redis (i jego pula polaczen) na proces
    return LockService()


@lru_cache
def get_identity_client() -> IdentityClient:
    return IdentityClient()


def get_comment_store(request: Request) -> CommentStore:
    return request.app.state.comment_store


def get_current_principal(
    x_user_email: str | None = Header(None),
    x_user_role: str | None = Header(None),
) -> Principal:
    """Tozsamosc przekazana przez gateway w naglowkach."""
    if not x_user_email:
        raise HTTPException(status_code=401, detail="Missing caller identity")

    role = (x_user_role or "user").strip().lower()
    if role not in ("guest", "user", "admin"):
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}")

    return Principal(email=x_user_email.strip(), role=role)


def require_admin(
    principal: Principal = Depends(get_current_principal),
    identity: IdentityClient = Depends(get_identity_client),
) -> Principal:
    if principal.role == "admin" or UserService.is_admin(principal.email):
        return principal

    if identity.enabled:
        try:
            if identity.is_admin(principal.email):
                return principal
        except requests.RequestException as e:
            logger.warning(f"Nie udalo sie sprawdzic roli {principal.email}: {e}")

    raise HTTPException(status_code=403, detail="Admin privileges required")
