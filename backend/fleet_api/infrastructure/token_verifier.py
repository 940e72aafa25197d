"""JWKS Token Verifier — validates RS256 bearer tokens issued by the identity provider.

Invariants:
    - verify() either returns a Principal with a non-empty sub or raises UnauthorizedError
    - Issuer always checked; audience checked only when configured
    - Signing keys fetched from the provider's JWKS endpoint and cached by PyJWKClient

Design Decisions:
    - PyJWT over a hand-rolled verifier: key rotation, clock skew and claim checks
      are handled by the library
    - Synchronous verify(): PyJWKClient does blocking HTTP, so the FastAPI dependency
      that calls it is a plain def and runs in the threadpool
    - jwks_client injectable so tests sign with a local RSA key
"""

import logging

import jwt
from jwt import PyJWKClient

from fleet_api.core.domain_types import Principal
from fleet_api.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class JWKSTokenVerifier:
    """TokenVerifier backed by a JWKS endpoint."""

    def __init__(
        self,
        jwks_uri: str,
        issuer: str,
        audience: str | None = None,
        algorithms: list[str] | None = None,
        cache_seconds: int = 300,
        jwks_client=None,
        leeway: int = 0,
    ):
        self._issuer = issuer
        self._audience = audience
        self._algorithms = algorithms or ["RS256"]
        self._leeway = leeway
        self._jwks = jwks_client or PyJWKClient(
            jwks_uri, cache_keys=True, lifespan=cache_seconds,
        )

    def verify(self, token: str) -> Principal:
        try:
            signing_key = self._jwks.get_signing_key_from_jwt(token)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=self._algorithms,
                issuer=self._issuer,
                audience=self._audience,
                leeway=self._leeway,
                options={
                    "require": ["sub", "iss"],
                    "verify_aud": self._audience is not None,
                },
            )
        except jwt.PyJWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise UnauthorizedError()

        sub = claims.get("sub")
        if not sub:
            raise UnauthorizedError()
        name = claims.get("name") or claims.get("nickname") or claims.get("email")
        return Principal(sub=sub, name=name, claims=claims)
