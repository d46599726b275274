"""JWT token service.

Provides JWT token creation and verification for authentication.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt

from plaza_auth.exceptions import TokenExpiredError, TokenMalformedError
from plaza_auth.schemas import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, TokenPayload


class JWTService:
    """Service for JWT token creation and verification.

    Handles access tokens (short-lived) and refresh tokens (long-lived)
    for user authentication. The signing key and lifetimes are fixed at
    construction time.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token("user@example.com", 42)
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    42
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 30
    DEFAULT_REFRESH_EXPIRE_DAYS = 7
    ALGORITHM = "HS256"
    USER_ID_CLAIM = "userId"
    TYPE_CLAIM = "type"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        refresh_token_expire_days: int = DEFAULT_REFRESH_EXPIRE_DAYS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_minutes
            Minutes until access token expires (default 30)
        refresh_token_expire_days
            Days until refresh token expires (default 7)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        self._refresh_expire = timedelta(days=refresh_token_expire_days)

    @property
    def access_token_ttl(self) -> timedelta:
        return self._access_expire

    @property
    def refresh_token_ttl(self) -> timedelta:
        return self._refresh_expire

    def create_access_token(
        self,
        email: str,
        user_id: int,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token.

        Parameters
        ----------
        email
            The user's email address, stored as the subject
        user_id
            The user's numeric identifier
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        return self._create_token(
            email=email,
            token_type=ACCESS_TOKEN_TYPE,
            expires_delta=expires_delta or self._access_expire,
            extra_claims={self.USER_ID_CLAIM: user_id},
        )

    def create_refresh_token(
        self,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a long-lived refresh token.

        Refresh tokens carry no user id; the server-side session store
        links them to their owner. A random ``jti`` keeps two tokens
        minted within the same second distinct.

        Parameters
        ----------
        email
            The user's email address, stored as the subject
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        return self._create_token(
            email=email,
            token_type=REFRESH_TOKEN_TYPE,
            expires_delta=expires_delta or self._refresh_expire,
            extra_claims={"jti": uuid4().hex},
        )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        TokenExpiredError
            If the signature is valid but the token is past its expiry
        TokenMalformedError
            If the token is empty, badly signed or structurally invalid
        """
        if not token:
            msg = "Token is empty"
            raise TokenMalformedError(msg)

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "iat", "exp", self.TYPE_CLAIM]},
            )

            raw_user_id = payload.get(self.USER_ID_CLAIM)
            return TokenPayload(
                subject=payload["sub"],
                token_type=payload[self.TYPE_CLAIM],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                user_id=int(raw_user_id) if raw_user_id is not None else None,
                token_id=payload.get("jti"),
            )

        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise TokenMalformedError(f"Malformed token payload: {e}") from e

    @staticmethod
    def subject_of(payload: TokenPayload) -> str:
        return payload.subject

    @staticmethod
    def user_id_of(payload: TokenPayload) -> int | None:
        return payload.user_id

    def _create_token(
        self,
        email: str,
        token_type: str,
        expires_delta: timedelta,
        extra_claims: dict[str, Any],
    ) -> str:
        """Create a JWT token with the given parameters.

        Parameters
        ----------
        email
            The user's email address
        token_type
            Either "access" or "refresh"
        expires_delta
            Time until token expires
        extra_claims
            Additional claims merged into the payload

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + expires_delta

        payload = {
            "sub": email,
            self.TYPE_CLAIM: token_type,
            "iat": now,
            "exp": expire,
            **extra_claims,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
