from fastapi import APIRouter, Depends, Request, Response

from app.core.auth import TOKEN_COOKIE, get_identity_service
from app.core.config import Settings, get_settings
from app.domains.identity.schemas import UserCreate, UserLogin, UserResponse
from app.domains.identity.services import IdentityService

router = APIRouter(tags=["authentication"])


@router.post("/register", response_model=UserResponse)
async def register(
    user_data: UserCreate,
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Регистрация нового пользователя"""
    user = await identity_service.register(user_data.username, user_data.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(
    login_data: UserLogin,
    response: Response,
    identity_service: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_settings),
):
    """Вход пользователя, токен кладётся в HTTP-only cookie"""
    user, token = await identity_service.login(login_data.username, login_data.password)

    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return UserResponse.model_validate(user)


@router.get("/profile")
async def profile(
    request: Request,
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Данные из токена текущего пользователя"""
    return identity_service.current_identity(request.cookies.get(TOKEN_COOKIE))


@router.post("/logout")
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Выход пользователя: cookie очищается, на сервере состояния нет"""
    response.delete_cookie(TOKEN_COOKIE, httponly=True, secure=settings.cookie_secure, samesite="lax")
    return "ok"
