"""API роуты для входа, выхода и смены пароля"""
from fastapi import APIRouter, status, Depends, Body, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import (
    authenticate,
    build_auth_cookie,
    build_logout_cookie,
    change_password,
    get_token_from_request,
)
from app.database import get_session
from app.schemas import LoginRequest, ChangePasswordRequest, SuccessResponse
from app.sessions import SessionManager
from app.utils.error_handler import handle_api_errors
from web.dependencies import get_session_manager, get_current_user_id


router = APIRouter()


@router.post(
    "/login",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Войти и получить cookie сессии"
)
@handle_api_errors
async def login_endpoint(
    response: Response,
    request: LoginRequest = Body(...),
    session: AsyncSession = Depends(get_session),
    session_manager: SessionManager = Depends(get_session_manager)
):
    """Проверяет логин и пароль, открывает сессию. 401 без указания причины"""
    token = await authenticate(
        session=session,
        session_manager=session_manager,
        username=request.username,
        password=request.password
    )
    response.headers.append("Set-Cookie", build_auth_cookie(token))
    return SuccessResponse()


@router.post(
    "/logout",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Выйти и сбросить cookie сессии"
)
@handle_api_errors
async def logout_endpoint(
    request: Request,
    response: Response,
    session_manager: SessionManager = Depends(get_session_manager)
):
    """Удаляет сессию, если она есть. Всегда успешно"""
    token = get_token_from_request(request)
    if token:
        await session_manager.delete_session(token)
    response.headers.append("Set-Cookie", build_logout_cookie())
    return SuccessResponse()


@router.post(
    "/change-password",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Сменить пароль текущего пользователя"
)
@handle_api_errors
async def change_password_endpoint(
    request: ChangePasswordRequest = Body(...),
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Сохраняет новый пароль. Открытые сессии остаются действительными"""
    await change_password(
        session=session,
        user_id=user_id,
        new_password=request.new_password
    )
    return SuccessResponse()
