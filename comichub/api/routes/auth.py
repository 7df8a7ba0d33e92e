"""
Authentication endpoints.
"""

from fastapi import APIRouter, HTTPException, status

from comichub.api.deps import CurrentUser, DbSession
from comichub.kernel.identity.identity_service import IdentityService
from comichub.schemas.auth import LoginRequest, ProfileResponse, RegisterRequest, TokenResponse

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db: DbSession):
    """Register a new account and return an access token."""
    identity_service = IdentityService(db)
    await identity_service.register_user(
        email=data.email,
        password=data.password,
        username=data.username,
        display_name=data.display_name,
    )

    result = await identity_service.authenticate(email=data.email, password=data.password)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to authenticate after registration",
        )

    profile, token, expires_in = result
    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=ProfileResponse.model_validate(profile),
    )


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: DbSession):
    """Exchange email and password for an access token."""
    identity_service = IdentityService(db)
    result = await identity_service.authenticate(email=data.email, password=data.password)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    profile, token, expires_in = result
    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=ProfileResponse.model_validate(profile),
    )


@router.get("/me", response_model=ProfileResponse)
async def me(user: CurrentUser):
    """The caller's profile, including ban and appeal state."""
    return ProfileResponse.model_validate(user)
