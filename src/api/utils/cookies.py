from fastapi import Response

from config import ApplicationConfig


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=ApplicationConfig.COOKIE_NAME,
        value=token,
        max_age=ApplicationConfig.JWT_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    # Sends an already-expired cookie so the browser drops it
    response.delete_cookie(
        key=ApplicationConfig.COOKIE_NAME,
        path="/",
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
    )
