"""FastAPI dependency injection providers.

The repository, identity tables and dashboard refresher are created once per
process here and handed to routes; nothing else holds them globally.
"""

from fastapi import Depends, HTTPException, Request, Response, status

from .auth.credentials import CredentialVerifier, UserDirectory, build_demo_identity
from .auth.session import SessionProvider
from .auth.token_store import CookieTokenStore
from .config import IoCConsoleConfig, get_config
from .models.user import User
from .repository.base import IoCRepository
from .repository.memory import InMemoryIoCRepository
from .repository.seed import demo_iocs
from .services.refresher import DashboardRefresher
from .utils.logging import get_logger

_dep_logger = get_logger("dependencies")

_config_instance: IoCConsoleConfig | None = None
_repository: IoCRepository | None = None
_identity: tuple[CredentialVerifier, UserDirectory] | None = None
_refresher: DashboardRefresher | None = None


def get_app_config() -> IoCConsoleConfig:
    """Get the application config singleton."""
    global _config_instance
    if _config_instance is None:
        _config_instance = get_config()
    return _config_instance


def get_repository() -> IoCRepository:
    """Get the IoC repository singleton."""
    global _repository
    if _repository is None:
        config = get_app_config()
        initial = demo_iocs() if config.seed_demo_data else []
        _repository = InMemoryIoCRepository(
            initial=initial,
            simulate_latency=config.simulate_latency,
        )
        _dep_logger.info("repository_ready", seeded=len(initial))
    return _repository


def get_identity() -> tuple[CredentialVerifier, UserDirectory]:
    """Get the credential verifier and user directory singleton."""
    global _identity
    if _identity is None:
        _identity = build_demo_identity(rounds=get_app_config().bcrypt_rounds)
    return _identity


def get_refresher() -> DashboardRefresher:
    """Get the dashboard refresher singleton."""
    global _refresher
    if _refresher is None:
        config = get_app_config()
        _refresher = DashboardRefresher(
            get_repository(),
            interval_seconds=config.dashboard_refresh_seconds,
        )
    return _refresher


def get_session_provider(
    request: Request,
    response: Response,
    config: IoCConsoleConfig = Depends(get_app_config),
) -> SessionProvider:
    """A session provider bound to this request's cookie/Authorization header."""
    verifier, directory = get_identity()
    store = CookieTokenStore(
        request,
        response,
        key=config.session_token_key,
        max_age=config.session_expiry_minutes * 60,
        secure=not config.debug,
    )
    return SessionProvider(
        verifier,
        directory,
        store,
        secret_key=config.secret_key,
        algorithm=config.jwt_algorithm,
        expiry_minutes=config.session_expiry_minutes,
        enforce_expiry=config.enforce_session_expiry,
        simulate_latency=config.simulate_latency,
    )


def get_current_user(provider: SessionProvider = Depends(get_session_provider)) -> User:
    """Resolve the session user or reject the request with 401."""
    user = provider.current_user()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
