"""Registration and login use cases with their inputs and results."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from authgate.ports import AuthError, CryptoPort, TokenPort
from authgate.users import User, UserRepository

_INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class LoginUserDto:
    """Login payload as received from a client."""

    email: str
    password: str


@dataclass(frozen=True)
class RegisterUserDto:
    """Registration payload as received from a client."""

    username: str
    email: str
    password: str


@dataclass(frozen=True)
class RegisterUserInput:
    """Input for the register use case."""

    username: str
    email: str
    password: str


@dataclass(frozen=True)
class RegisterUserResponse:
    """Result of a successful registration."""

    user_id: uuid.UUID
    username: str
    email: str


@dataclass
class RegisterUserUseCase:
    """Creates a new user account."""

    user_repository: UserRepository
    crypto: CryptoPort

    async def execute(self, data: RegisterUserInput) -> RegisterUserResponse:
        """Register a user; raise AuthError if the e-mail address is taken."""
        if await self.user_repository.exists_by_email(data.email):
            raise AuthError(f"Email '{data.email}' is already registered")

        user = User(
            id=uuid.uuid4(),
            username=data.username,
            email=data.email,
            password_hash=self.crypto.hash_password(data.password),
        )
        saved = await self.user_repository.create(user)
        return RegisterUserResponse(
            user_id=saved.id, username=saved.username, email=saved.email
        )


@dataclass(frozen=True)
class LoginUserInput:
    """Input for the login use case."""

    email: str
    password: str


@dataclass(frozen=True)
class LoginUserResponse:
    """Result of a successful login."""

    access_token: str


@dataclass
class LoginUserUseCase:
    """Authenticates a user and issues an access token."""

    user_repository: UserRepository
    crypto: CryptoPort
    token: TokenPort

    async def execute(self, data: LoginUserInput) -> LoginUserResponse:
        """Check credentials; raise AuthError if they do not match."""
        user = await self.user_repository.find_by_email(data.email)
        if user is None:
            raise AuthError(_INVALID_CREDENTIALS)
        if not self.crypto.verify_password(data.password, user.password_hash):
            raise AuthError(_INVALID_CREDENTIALS)
        return LoginUserResponse(access_token=self.token.generate_token(user.id))