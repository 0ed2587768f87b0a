"""Firebase Authentication Service Module

This module verifies Firebase ID tokens for the service's authenticated routes.
The Firebase app is initialized on first use rather than at import time, so the
application (and its tests) can start without a credentials file.

Dependencies:
- firebase_admin: For Firebase ID token verification.
- fastapi: For request access and the dependency signature.
- loguru: For logging operations.
- app.errors.exceptions: For custom exception handling.
"""

import os
import threading
from typing import Optional, Tuple

import firebase_admin
from firebase_admin import auth, credentials
from fastapi import Request
from loguru import logger

from app.errors.exceptions import Unauthorized

_init_lock = threading.Lock()


def _ensure_firebase_app():
    """Initialize the default Firebase app from FIREBASE_CREDENTIALS_PATH once.

    Raises:
        FileNotFoundError: If the credentials file does not exist
    """
    if firebase_admin._apps:
        return
    with _init_lock:
        if firebase_admin._apps:
            return
        file_path = os.getenv("FIREBASE_CREDENTIALS_PATH")
        # Check if credentials exists
        if not file_path or not os.path.exists(file_path):
            logger.error(f"Firebase credentials file not found at {file_path}")
            raise FileNotFoundError(f"Firebase credentials file not found at {file_path}")
        cred = credentials.Certificate(file_path)
        firebase_admin.initialize_app(cred)
        logger.info("Firebase app initialized")


def verify_id_token(id_token: str) -> Tuple[Optional[dict], Optional[str]]:
    """Verify Firebase ID token and extract user information.

    Args:
        id_token (str): Firebase ID token to verify

    Returns:
        tuple: (decoded_token, uid) if valid, (None, None) if invalid

    Note:
        Checks if token is revoked using check_revoked=True parameter
    """
    _ensure_firebase_app()
    try:
        decoded_token = auth.verify_id_token(id_token, check_revoked=True)
        uid = decoded_token['uid']
        return decoded_token, uid
    except (auth.InvalidIdTokenError, auth.RevokedIdTokenError, auth.ExpiredIdTokenError):
        # Token is invalid, expired or revoked.
        return None, None


def get_current_user_uid(request: Request) -> str:
    """Extract and verify Firebase ID token from request headers.

    This function serves as a FastAPI dependency to authenticate users
    by verifying their Firebase ID token from the Authorization header.

    Args:
        request (Request): FastAPI request object containing headers

    Returns:
        str: Firebase UID of the authenticated user

    Raises:
        Unauthorized: 401 if authorization header is missing, invalid, or token is expired

    Example:
        Used as FastAPI dependency:
        @app.get("/protected")
        async def protected_route(uid: str = Depends(get_current_user_uid)):
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthorized("Missing or invalid authorization header")

    token = auth_header.split(" ")[1]
    _, uid = verify_id_token(token)
    if not uid:
        raise Unauthorized("Invalid or expired token")

    return uid
