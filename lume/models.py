import datetime
from typing import Any, Dict, Optional

import sqlalchemy
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from lume.database import Base

__all__ = [
    "Artifact",
    "utcnow",
]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


# JSONB on PostgreSQL, plain JSON elsewhere (sqlite in tests)
JSONContent = sqlalchemy.JSON().with_variant(JSONB(), "postgresql")


class Artifact(Base):
    __tablename__ = "artifacts"

    id: Mapped[str] = mapped_column(sqlalchemy.Text, primary_key=True)
    conversation_id: Mapped[str] = mapped_column(
        sqlalchemy.Text, nullable=False, index=True
    )
    message_id: Mapped[Optional[str]] = mapped_column(
        sqlalchemy.Text, nullable=True, index=True
    )
    owner_id: Mapped[Optional[str]] = mapped_column(
        sqlalchemy.Text, nullable=True, index=True
    )
    type: Mapped[str] = mapped_column(
        sqlalchemy.Text, nullable=False, index=True
    )
    content: Mapped[Dict[str, Any]] = mapped_column(
        JSONContent, nullable=False
    )
    version: Mapped[str] = mapped_column(
        sqlalchemy.Text,
        nullable=False,
        default="1",
        server_default="1",
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        sqlalchemy.DateTime,
        nullable=False,
        default=utcnow,
        server_default=func.current_timestamp(),
        index=True,
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        sqlalchemy.DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<Artifact id={self.id} type={self.type} version={self.version}>"
        )
