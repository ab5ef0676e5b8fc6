import typing

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from lume.config import settings

__all__ = ['Base', 'create_engine', 'create_session_factory']


class Base(AsyncAttrs, DeclarativeBase):
    __allow_unmapped__ = True
    metadata = MetaData()


def create_engine(
    database_url: typing.Optional[str] = None,
    **kwargs,
) -> AsyncEngine:
    kwargs.setdefault('echo', settings.database_echo)
    return create_async_engine(database_url or settings.database_url, **kwargs)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
