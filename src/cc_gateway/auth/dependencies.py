"""FastAPI dependencies: get_current_principal, require_card_owner.

Usage in any protected router:
    from src.cc_gateway.auth.dependencies import require_card_owner

    @router.get("/protected")
    async def protected(principal: Principal = Depends(require_card_owner)):
        ...

The principal is resolved once here and handed to handlers as a plain value;
nothing downstream reads identity from ambient state.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_common.database import get_db_session
from src.cc_common.errors import InvalidCredentialsError, RoleRequiredError
from src.cc_gateway.user.service import Principal, UserService

# auto_error: a request without an Authorization header gets 401 + challenge
basic_scheme = HTTPBasic(realm=settings.BASIC_AUTH_REALM)

# Challenge sent with every 401 (RFC 7617)
CHALLENGE_HEADERS: dict[str, str] = {
    "WWW-Authenticate": f'Basic realm="{settings.BASIC_AUTH_REALM}"'
}

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid username or password",
    headers=CHALLENGE_HEADERS,
)

_user_service = UserService()


async def get_current_principal(
    request: Request,
    credentials: HTTPBasicCredentials = Depends(basic_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Principal:
    """Validate HTTP Basic credentials and return the caller's Principal.

    Raises HTTP 401 if the credentials are missing or wrong.
    Raises HTTP 401 (AccountDisabledError) if the user account is disabled.
    The resolved username is left on request.state for the request log.
    """
    try:
        principal = await _user_service.authenticate(
            credentials.username, credentials.password, db
        )
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
    request.state.username = principal.name
    return principal


async def require_card_owner(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Verify the caller holds the card-owner role.

    Raises HTTP 403 (RoleRequiredError) otherwise. Runs before any cash card
    handler, so a role-less user never reaches the repository.
    """
    if principal.role != settings.CARD_OWNER_ROLE:
        raise RoleRequiredError(settings.CARD_OWNER_ROLE)
    return principal
