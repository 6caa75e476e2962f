"""
Auth Service - login and registration.

Both operations return the signed access token and the public user fields.
"""

import logging
from typing import Tuple

from app.core.auth import hash_password, verify_password, create_token_for
from app.core.errors import AuthenticationError
from app.models.records import UserRecord
from app.services import user_service

logger = logging.getLogger(__name__)


def login(email: str, password: str) -> Tuple[str, UserRecord]:
    """
    Check credentials and issue a token.

    Unknown email and wrong password fail identically.
    """
    user = user_service.find_user_by_email(email)
    if user is None or not verify_password(password, user.password):
        logger.info("Failed login for %s", email)
        raise AuthenticationError("Invalid email or password")

    token = create_token_for(user.id, user.role, user.email)
    return token, user


def register(name: str, email: str, password: str, role: str = "USER") -> Tuple[str, UserRecord]:
    """Create the account and log it in straight away."""
    user = user_service.create_user(name, email, hash_password(password), role)
    logger.info("Registered user %s with role %s", user.id, user.role)

    token = create_token_for(user.id, user.role, user.email)
    return token, user
