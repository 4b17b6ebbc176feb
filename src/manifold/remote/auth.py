"""Shared-secret token gate for the remote mirror"""

import logging
import secrets
from typing import Annotated, Optional

from fastapi import Header, HTTPException, Request, status


TOKEN_HEADER = "x-manifold-token"
TOKEN_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"

logger = logging.getLogger(__name__)


def require_token(
    request: Request,
    x_manifold_token: Annotated[Optional[str], Header()] = None,
) -> None:
    """FastAPI dependency: reject the request unless the header matches the server token."""
    expected = request.app.state.token
    if not x_manifold_token or x_manifold_token.strip() != expected:
        logger.warning("Rejected %s %s: invalid token", request.method, request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def generate_token(length: int = 24) -> str:
    """Random access token without look-alike characters (0/O, 1/l/I)."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))
