from fastapi import APIRouter, Depends, status

from app.dependencies import CurrentUser, get_auth_service, get_current_user
from app.schemas import AuthData, Envelope, LoginRequest, RegisterRequest, UserData, UserResponse, ok
from app.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=Envelope[AuthData],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Create an account and return it with a fresh token"""
    result = await service.register(payload.email, payload.password, payload.name)
    return ok(
        AuthData(user=UserResponse.model_validate(result.user), token=result.token),
        message="User registered successfully",
    )


@router.post("/login", response_model=Envelope[AuthData], response_model_exclude_unset=True)
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange email and password for a token"""
    result = await service.login(payload.email, payload.password)
    return ok(
        AuthData(user=UserResponse.model_validate(result.user), token=result.token),
        message="Login successful",
    )


@router.get("/me", response_model=Envelope[UserData], response_model_exclude_unset=True)
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Return the user behind the bearer token"""
    user = await service.get_current_user(current_user.user_id)
    return ok(UserData(user=UserResponse.model_validate(user)))
