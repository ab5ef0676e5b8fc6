import datetime
import typing

from pydantic import BaseModel, Field, field_serializer

__all__ = [
    'Artifact',
    'ArtifactCreate',
    'ArtifactReference',
    'ArtifactUpdate',
]


class ArtifactCreate(BaseModel):
    conversation_id: str
    type: str
    content: typing.Any
    owner_id: typing.Optional[str] = None
    message_id: typing.Optional[str] = None
    id: typing.Optional[str] = None


class ArtifactUpdate(BaseModel):
    content: typing.Optional[typing.Any] = None


class Artifact(BaseModel):
    id: str
    type: str
    owner_id: typing.Optional[str] = Field(
        default=None, serialization_alias='ownerId')
    conversation_id: str = Field(serialization_alias='conversationId')
    message_id: typing.Optional[str] = Field(
        default=None, serialization_alias='messageId')
    version: str
    content: typing.Any
    created_at: datetime.datetime = Field(serialization_alias='createdAt')
    updated_at: datetime.datetime = Field(serialization_alias='updatedAt')

    @field_serializer('created_at', 'updated_at', when_used='json')
    def serialize_timestamp(self, value: datetime.datetime) -> str:
        # Stored timestamps are naive UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return value.isoformat()

    class Config:
        from_attributes = True


class ArtifactReference(BaseModel):
    """Snapshot of an artifact embedded in a tool-result message part."""

    artifactId: str
    type: str
    version: str
    content: typing.Any = None
    error: typing.Optional[str] = None
    message: typing.Optional[str] = None
