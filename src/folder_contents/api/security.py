"""Bearer token authentication.

Callers must present ``Authorization: Bearer <jwt>``. The token's ``sub``
claim identifies the user. This is the coarse "logged in" check; per-folder
read access is decided later by the access checker.
"""

from typing import Any, Dict, Optional, Sequence

import jwt
from loguru import logger
from starlette.requests import Request

from folder_contents.services.access import Principal
from folder_contents.services.exceptions import AuthenticationRequired


class BearerTokenAuthenticator:
    """Turns a request's bearer token into a Principal."""

    def __init__(self, secret: str, algorithms: Sequence[str] = ("HS256",)):
        self.secret = secret
        self.algorithms = list(algorithms)

    def extract_jwt_from_request(self, request: Request) -> Optional[str]:
        """Extract JWT token from Authorization header."""
        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header[7:]  # Remove "Bearer " prefix
        if auth_header:
            logger.warning("Authorization header doesn't use the Bearer scheme")
        return None

    def decode_jwt_claims(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode JWT claims, None if the token is not valid."""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                options={"verify_aud": False},
            )
        except jwt.PyJWTError as e:
            logger.warning(f"Rejected bearer token: {type(e).__name__}: {e}")
            return None

    def authenticate(self, request: Request) -> Principal:
        """Authenticate the caller of ``request``.

        Raises:
            AuthenticationRequired: if the token is missing, invalid or has no subject
        """
        token = self.extract_jwt_from_request(request)
        if not token:
            raise AuthenticationRequired("Missing Authorization header")

        claims = self.decode_jwt_claims(token)
        if not claims:
            raise AuthenticationRequired("Invalid JWT token")

        user_id = claims.get("sub")
        if not user_id:
            raise AuthenticationRequired("JWT token has no subject")

        return Principal(user_id=str(user_id), email=claims.get("email"))
