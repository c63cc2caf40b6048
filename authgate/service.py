"""Auth service messages and the controller that serves them."""

from __future__ import annotations

from dataclasses import dataclass

from authgate.ports import AuthError, CryptoPort, TokenPort
from authgate.sql_repository import RepositoryError
from authgate.use_cases import (
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from authgate.users import UserRepository


@dataclass(frozen=True)
class RegisterRequest:
    """Request to create a new account."""

    username: str
    email: str
    password: str


@dataclass(frozen=True)
class RegisterResponse:
    """Outcome of a registration; ``error`` is empty on success."""

    user_id: str = ""
    username: str = ""
    email: str = ""
    error: str = ""


@dataclass(frozen=True)
class LoginRequest:
    """Request to log in with an e-mail address and password."""

    email: str
    password: str


@dataclass(frozen=True)
class LoginResponse:
    """Outcome of a login; ``error`` is empty on success."""

    access_token: str = ""
    error: str = ""


class AuthServiceError(Exception):
    """Raised when the auth service cannot be reached or fails in transport."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class AuthController:
    """Serves register and login requests.

    Failures of the use cases are reported in the response's ``error`` field
    rather than raised.
    """

    user_repository: UserRepository
    crypto: CryptoPort
    token: TokenPort

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        """Register a user and describe the outcome."""
        use_case = RegisterUserUseCase(
            user_repository=self.user_repository, crypto=self.crypto
        )
        try:
            result = await use_case.execute(
                RegisterUserInput(
                    username=request.username,
                    email=request.email,
                    password=request.password,
                )
            )
        except (AuthError, RepositoryError) as exc:
            return RegisterResponse(error=str(exc))
        return RegisterResponse(
            user_id=str(result.user_id),
            username=result.username,
            email=result.email,
        )

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Check credentials and describe the outcome."""
        use_case = LoginUserUseCase(
            user_repository=self.user_repository,
            crypto=self.crypto,
            token=self.token,
        )
        try:
            result = await use_case.execute(
                LoginUserInput(email=request.email, password=request.password)
            )
        except (AuthError, RepositoryError) as exc:
            return LoginResponse(error=str(exc))
        return LoginResponse(access_token=result.access_token)