"""Authentication routes — login, logout and the current user."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...auth.session import SessionProvider
from ...dependencies import get_current_user, get_session_provider
from ...models.user import User

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


@router.post("/login")
async def login(
    body: LoginRequest,
    provider: SessionProvider = Depends(get_session_provider),
):
    """Authenticate and start a session (httpOnly cookie plus bearer token).

    Bad credentials surface as 401 through the AuthenticationError handler.
    """
    user = await provider.login(body.username, body.password)
    return {
        "access_token": provider.store.get(),
        "token_type": "bearer",
        "user": user.to_wire(),
    }


@router.post("/logout")
async def logout(provider: SessionProvider = Depends(get_session_provider)):
    """End the session. Succeeds even when no session exists."""
    provider.logout()
    return {"message": "Logged out"}


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user info."""
    return current_user.to_wire()
