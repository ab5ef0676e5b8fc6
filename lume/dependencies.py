import typing

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from lume.config import settings
from lume.utils import jwt_utils

__all__ = ['get_async_session', 'get_current_user_id']


bearer_scheme = HTTPBearer(auto_error=False)


async def get_async_session(
    request: Request,
) -> typing.AsyncGenerator[AsyncSession, None]:
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


async def get_current_user_id(
    credentials: typing.Optional[HTTPAuthorizationCredentials] = Depends(
        bearer_scheme
    ),
) -> typing.Optional[str]:
    """
    Returns id of the authenticated caller or None for anonymous calls.

    Tokens are issued by the login flow, here we only verify the
    signature and trust the subject.
    """
    if credentials is None:
        return None
    try:
        payload = jwt_utils.decode_JWT_token(
            credentials.credentials,
            settings.jwt_secret,
            settings.jwt_algorithm,
        )
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f'Invalid token: {exc}',
            headers={'WWW-Authenticate': 'Bearer'},
        )
    user_id = payload.get('sub')
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Token has no subject',
            headers={'WWW-Authenticate': 'Bearer'},
        )
    return str(user_id)
