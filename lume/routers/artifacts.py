import typing

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from lume.crud import artifacts
from lume.dependencies import get_async_session, get_current_user_id
from lume.schemas import artifact_schema


router = APIRouter(
    prefix='/artifacts',
    tags=['artifacts'],
)


@router.get(
    '/conversation/{conversation_id}',
    response_model=typing.List[artifact_schema.Artifact],
)
async def get_conversation_artifacts(
    conversation_id: str,
    user_id: typing.Optional[str] = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    return await artifacts.get_conversation_artifacts(
        session,
        conversation_id,
        user_id=user_id,
    )


@router.get('/{artifact_id}', response_model=artifact_schema.Artifact)
async def get_artifact(
    artifact_id: str,
    user_id: typing.Optional[str] = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    return await artifacts.get_artifact(session, artifact_id, user_id=user_id)


@router.patch('/{artifact_id}', response_model=artifact_schema.Artifact)
async def update_artifact(
    artifact_id: str,
    payload: artifact_schema.ArtifactUpdate,
    user_id: typing.Optional[str] = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    if payload.content is None:
        raise HTTPException(
            detail='Missing content',
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return await artifacts.update_artifact(
        session,
        artifact_id,
        payload.content,
        user_id=user_id,
    )


@router.delete('/{artifact_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_artifact(
    artifact_id: str,
    user_id: typing.Optional[str] = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    await artifacts.delete_artifact(session, artifact_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
