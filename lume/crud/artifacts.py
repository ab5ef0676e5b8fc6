import functools
import logging
import secrets
import string
import typing

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lume import models
from lume.artifact_types import validate_content
from lume.constants import (
    ARTIFACT_ID_PREFIX,
    ARTIFACT_ID_SIZE,
    INITIAL_VERSION,
)
from lume.errors import (
    ArtifactValidationError,
    DataNotFoundError,
    PermissionDenied,
    StoreError,
)
from lume.perms.authorization import can_access, can_modify
from lume.schemas import artifact_schema
from lume.utils.versioning import next_version

__all__ = [
    'create_artifact',
    'delete_artifact',
    'generate_artifact_id',
    'get_artifact',
    'get_conversation_artifacts',
    'get_latest_artifact_states',
    'update_artifact',
]


ID_ALPHABET = string.ascii_letters + string.digits


class ArtifactState(typing.TypedDict):
    id: str
    type: str
    version: str
    content: typing.Any


def generate_artifact_id() -> str:
    suffix = ''.join(
        secrets.choice(ID_ALPHABET) for _ in range(ARTIFACT_ID_SIZE)
    )
    return f'{ARTIFACT_ID_PREFIX}_{suffix}'


def store_operation(func):
    @functools.wraps(func)
    async def wrapper(session: AsyncSession, *args, **kwargs):
        try:
            return await func(session, *args, **kwargs)
        except SQLAlchemyError as exc:
            logging.exception('Artifact store failure in %s', func.__name__)
            await session.rollback()
            raise StoreError(f'{func.__name__} failed') from exc

    return wrapper


def _validate(type_: str, content: typing.Any) -> typing.Any:
    result = validate_content(type_, content)
    if not result.ok:
        raise ArtifactValidationError(
            f'Invalid {type_} content',
            errors=result.errors,
        )
    return result.value


async def _get_existing(
    session: AsyncSession,
    artifact_id: str,
    for_update: bool = False,
) -> models.Artifact:
    query = (
        select(models.Artifact)
        .where(models.Artifact.id == artifact_id)
        .execution_options(populate_existing=True)
    )
    if for_update:
        query = query.with_for_update()
    db_artifact = (await session.execute(query)).scalars().first()
    if not db_artifact:
        raise DataNotFoundError(f'Artifact={artifact_id} not found')
    return db_artifact


@store_operation
async def create_artifact(
    session: AsyncSession,
    payload: artifact_schema.ArtifactCreate,
) -> models.Artifact:
    content = _validate(payload.type, payload.content)
    db_artifact = models.Artifact(
        id=payload.id or generate_artifact_id(),
        conversation_id=payload.conversation_id,
        message_id=payload.message_id,
        owner_id=payload.owner_id,
        type=payload.type,
        content=content,
        version=INITIAL_VERSION,
    )
    session.add(db_artifact)
    await session.commit()
    await session.refresh(db_artifact)
    logging.info(
        'Created artifact %s of type %s in conversation %s',
        db_artifact.id,
        db_artifact.type,
        db_artifact.conversation_id,
    )
    return db_artifact


@store_operation
async def get_artifact(
    session: AsyncSession,
    artifact_id: str,
    user_id: typing.Optional[str] = None,
    check_access: bool = True,
) -> models.Artifact:
    db_artifact = await _get_existing(session, artifact_id)
    if check_access and not can_access(db_artifact, user_id):
        raise PermissionDenied(
            f'User={user_id} has no access to artifact={artifact_id}'
        )
    return db_artifact


@store_operation
async def get_conversation_artifacts(
    session: AsyncSession,
    conversation_id: str,
    user_id: typing.Optional[str] = None,
) -> typing.List[models.Artifact]:
    visibility = models.Artifact.owner_id.is_(None)
    if user_id:
        visibility = or_(visibility, models.Artifact.owner_id == user_id)
    query = (
        select(models.Artifact)
        .where(models.Artifact.conversation_id == conversation_id, visibility)
        .order_by(
            models.Artifact.created_at.desc(),
            models.Artifact.id.desc(),
        )
    )
    return (await session.execute(query)).scalars().all()


@store_operation
async def update_artifact(
    session: AsyncSession,
    artifact_id: str,
    content: typing.Any,
    user_id: typing.Optional[str] = None,
) -> models.Artifact:
    db_artifact = await _get_existing(session, artifact_id, for_update=True)
    if not can_modify(db_artifact, user_id):
        await session.rollback()
        raise PermissionDenied(
            f'User={user_id} cannot modify artifact={artifact_id}'
        )
    try:
        validated = _validate(db_artifact.type, content)
    except ArtifactValidationError:
        await session.rollback()
        raise
    previous_version = db_artifact.version
    db_artifact.content = validated
    db_artifact.version = next_version(previous_version)
    db_artifact.updated_at = models.utcnow()
    await session.commit()
    await session.refresh(db_artifact)
    logging.info(
        'Updated artifact %s from version %s to %s',
        artifact_id,
        previous_version,
        db_artifact.version,
    )
    return db_artifact


@store_operation
async def delete_artifact(
    session: AsyncSession,
    artifact_id: str,
    user_id: typing.Optional[str] = None,
):
    db_artifact = await _get_existing(session, artifact_id)
    if not can_modify(db_artifact, user_id):
        raise PermissionDenied(
            f'User={user_id} cannot delete artifact={artifact_id}'
        )
    await session.execute(
        delete(models.Artifact).where(models.Artifact.id == artifact_id)
    )
    await session.commit()
    logging.info('Deleted artifact %s', artifact_id)


@store_operation
async def get_latest_artifact_states(
    session: AsyncSession,
    artifact_ids: typing.Iterable[str],
) -> typing.Dict[str, ArtifactState]:
    # Privileged read for history hydration, no access checks here
    ids = list(artifact_ids)
    if not ids:
        return {}
    query = select(
        models.Artifact.id,
        models.Artifact.type,
        models.Artifact.version,
        models.Artifact.content,
    ).where(models.Artifact.id.in_(ids))
    rows = (await session.execute(query)).all()
    return {
        row.id: ArtifactState(
            id=row.id,
            type=row.type,
            version=row.version,
            content=row.content,
        )
        for row in rows
    }
