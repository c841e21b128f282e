"""Authentication routes - register, login, current account."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_caller, get_db_session
from src.api.schemas.auth import (
    AccountResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from src.domain import Caller
from src.domain.services.auth_service import (
    AccountExistsError,
    AccountNotFoundError,
    AuthService,
    InvalidCredentialsError,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new account",
    description=(
        "Create an account with the default alumni role and a pending "
        "verification profile awaiting admin review."
    ),
)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    service = AuthService(session)

    try:
        result = await service.register(
            email=payload.email,
            password=payload.password,
            full_name=payload.full_name,
            id_number=payload.id_number,
            account_type=payload.account_type,
        )
    except AccountExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return RegisterResponse(
        account=AccountResponse(**result["account"]),
        tokens=TokenResponse(**result["tokens"]),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with email and password, returns a JWT access token.",
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    service = AuthService(session)

    try:
        result = await service.login(email=payload.email, password=payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    return LoginResponse(
        account=AccountResponse(**result["account"]),
        tokens=TokenResponse(**result["tokens"]),
    )


@router.get("/me", response_model=MeResponse, summary="Get current account")
async def get_me(
    caller: Caller = Depends(get_current_caller),
    session: AsyncSession = Depends(get_db_session),
) -> MeResponse:
    """Current account with its freshly resolved role and verification status."""
    service = AuthService(session)

    try:
        account = await service.get_account(caller.account_id)
    except AccountNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return MeResponse(account=AccountResponse(**account))
