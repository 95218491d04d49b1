# core/auth.py

from typing import Optional
from uuid import UUID

import jwt
from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .exceptions import UnauthorizedError

# Claim names used by the identity service (ASP.NET style) and the short forms
NAME_CLAIMS = ("sub", "name", "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/name")
ROLE_CLAIMS = ("role", "roles", "http://schemas.microsoft.com/ws/2008/06/identity/claims/role")

FARMER_ROLE = "Farmer"

bearer_scheme = HTTPBearer(auto_error=False)


class FarmerPrincipal:
    """
    FastAPI dependency that turns a bearer token into the caller's farmer id.

    Tokens are issued elsewhere; this only verifies the signature, expiry and
    that the caller holds the Farmer role.
    """

    def __init__(self, settings: Settings):
        self.signing_key = settings.jwt_signing_key
        self.algorithm = settings.jwt_algorithm

    async def __call__(
        self, credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme)
    ) -> UUID:
        if credentials is None:
            raise UnauthorizedError("Missing bearer token")

        try:
            claims = jwt.decode(credentials.credentials, self.signing_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise UnauthorizedError(f"Invalid token: {e}") from e

        if FARMER_ROLE not in _roles(claims):
            raise HTTPException(status_code=403, detail="Farmer role required")

        subject = next((claims[c] for c in NAME_CLAIMS if claims.get(c)), None)
        try:
            return UUID(str(subject))
        except ValueError as e:
            raise UnauthorizedError("Token subject is not a farmer id") from e


def _roles(claims: dict) -> set:
    roles = set()
    for claim in ROLE_CLAIMS:
        value = claims.get(claim)
        if isinstance(value, str):
            roles.add(value)
        elif isinstance(value, (list, tuple)):
            roles.update(value)
    return roles
