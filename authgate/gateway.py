"""HTTP gateway: application state and routes in front of the auth service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from authgate.service import (
    AuthServiceError,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)


class _AuthClient(Protocol):
    async def register(self, request: RegisterRequest) -> RegisterResponse: ...

    async def login(self, request: LoginRequest) -> LoginResponse: ...


@dataclass(frozen=True)
class AuthAppState:
    """State used by the auth routes."""

    auth_client: _AuthClient


@dataclass(frozen=True)
class AppState:
    """Full state of the HTTP gateway."""

    config: Any
    auth: AuthAppState


class _PayloadError(Exception):
    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def _is_json(content_type: str) -> bool:
    mime = content_type.split(";", 1)[0].strip().lower()
    if mime == "application/json":
        return True
    return mime.startswith("application/") and mime.endswith("+json")


async def _read_payload(request: Request, fields: tuple[str, ...]) -> dict[str, str]:
    if not _is_json(request.headers.get("content-type", "")):
        raise _PayloadError(
            415, "Expected request with `Content-Type: application/json`"
        )
    body = await request.body()
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise _PayloadError(
            400, f"Failed to parse the request body as JSON: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise _PayloadError(
            422, "Failed to deserialize the JSON body: expected an object"
        )
    for name in fields:
        if name not in data:
            raise _PayloadError(
                422, f"Failed to deserialize the JSON body: missing field `{name}`"
            )
        if not isinstance(data[name], str):
            raise _PayloadError(
                422,
                f"Failed to deserialize the JSON body: field `{name}` must be a string",
            )
    return {name: data[name] for name in fields}


def _connection_error(exc: AuthServiceError) -> str:
    return f"gRPC connection error: {exc.message}"


def _login_body(access_token: str | None, error: str | None) -> dict[str, str | None]:
    return {"access_token": access_token, "error": error}


def auth_routes(state: AuthAppState) -> list[Route]:
    """Build the ``/auth/register`` and ``/auth/login`` routes."""

    async def register(request: Request) -> Response:
        try:
            payload = await _read_payload(request, ("username", "email", "password"))
        except _PayloadError as exc:
            return PlainTextResponse(exc.detail, status_code=exc.status_code)

        try:
            res = await state.auth_client.register(RegisterRequest(**payload))
        except AuthServiceError as exc:
            return JSONResponse(
                {"user_id": "", "username": "", "email": _connection_error(exc)},
                status_code=500,
            )
        if res.error:
            return JSONResponse(
                {"user_id": "", "username": "", "email": res.error},
                status_code=422,
            )
        return JSONResponse(
            {"user_id": res.user_id, "username": res.username, "email": res.email},
            status_code=201,
        )

    async def login(request: Request) -> Response:
        try:
            payload = await _read_payload(request, ("email", "password"))
        except _PayloadError as exc:
            return PlainTextResponse(exc.detail, status_code=exc.status_code)

        try:
            res = await state.auth_client.login(LoginRequest(**payload))
        except AuthServiceError as exc:
            return JSONResponse(
                _login_body(None, _connection_error(exc)), status_code=500
            )
        if res.error:
            return JSONResponse(_login_body(None, res.error), status_code=401)
        return JSONResponse(_login_body(res.access_token, None), status_code=200)

    return [
        Route("/auth/register", register, methods=["POST"]),
        Route("/auth/login", login, methods=["POST"]),
    ]


async def _health(request: Request) -> Response:
    return PlainTextResponse("OK")


def http_router(state: AppState) -> Starlette:
    """Build the gateway application with the health check and auth routes."""
    routes = [Route("/health", _health, methods=["GET"]), *auth_routes(state.auth)]
    return Starlette(routes=routes)