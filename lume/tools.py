"""
Tool executors producing artifacts during a conversation turn.

Each executor persists the artifact and returns the tool-result message
part which embeds a snapshot of the artifact reference. The snapshot is
refreshed later by ``lume.hydration`` when the history is replayed.
"""

import copy
import logging
import typing
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from lume.constants import (
    INITIAL_VERSION,
    TOOL_PART_PREFIX,
    ArtifactType,
    ToolPartState,
)
from lume.crud.artifacts import create_artifact, generate_artifact_id
from lume.errors import ArtifactToolError, ArtifactValidationError, StoreError
from lume.schemas.artifact_schema import ArtifactCreate, ArtifactReference

__all__ = [
    'CREATE_MARKDOWN_FILE',
    'CREATE_SLIDES_OUTLINE',
    'ToolContext',
    'create_markdown_file',
    'create_slides_outline',
    'normalize_slides_outline',
]

logger = logging.getLogger(__name__)

CREATE_SLIDES_OUTLINE = 'createSlidesOutline'
CREATE_MARKDOWN_FILE = 'createMarkdownFile'


@dataclass
class ToolContext:
    conversation_id: str
    message_id: str
    tool_call_id: str
    user_id: typing.Optional[str] = None


def _tool_result_part(
    tool_name: str,
    context: ToolContext,
    reference: ArtifactReference,
) -> dict:
    return {
        'type': f'{TOOL_PART_PREFIX}{tool_name}',
        'toolCallId': context.tool_call_id,
        'state': ToolPartState.OUTPUT_AVAILABLE.value,
        'output': {
            key: value
            for key, value in reference.model_dump().items()
            if value is not None
        },
    }


def normalize_slides_outline(outline: dict) -> dict:
    """
    Fixes slide bookkeeping the model tends to get wrong.

    ``slidesCount`` is set to the real number of slides and slides are
    renumbered 1..n across chapters when their numbers are not already
    exactly that sequence. The input is not modified.
    """
    result = copy.deepcopy(outline)
    if not isinstance(result, dict):
        return result
    chapters = result.get('chapters')
    if not isinstance(chapters, list):
        chapters = []
    slides = [
        slide
        for chapter in chapters
        if isinstance(chapter, dict)
        and isinstance(chapter.get('slides'), list)
        for slide in chapter['slides']
        if isinstance(slide, dict)
    ]
    total_slides = len(slides)
    header = result.get('outline')
    if not isinstance(header, dict):
        header = {}
    if header.get('slidesCount') != total_slides:
        logger.warning(
            'Slide count mismatch: declared %s, actual %s. Auto-correcting',
            header.get('slidesCount'),
            total_slides,
        )
        header['slidesCount'] = total_slides
        result['outline'] = header

    numbers = sorted(
        slide.get('slideNumber')
        if isinstance(slide.get('slideNumber'), int) else 0
        for slide in slides
    )
    if numbers != list(range(1, total_slides + 1)):
        logger.warning('Slide numbers are not sequential, renumbering')
        for number, slide in enumerate(slides, start=1):
            slide['slideNumber'] = number
    return result


async def create_slides_outline(
    session: AsyncSession,
    context: ToolContext,
    outline: dict,
) -> dict:
    artifact_id = generate_artifact_id()
    try:
        db_artifact = await create_artifact(
            session,
            ArtifactCreate(
                id=artifact_id,
                conversation_id=context.conversation_id,
                message_id=context.message_id,
                owner_id=context.user_id,
                type=ArtifactType.SLIDES_OUTLINE.value,
                content=normalize_slides_outline(outline),
            ),
        )
    except (ArtifactValidationError, StoreError) as exc:
        logger.error(
            'Cannot create slides outline %s for message %s: %s',
            artifact_id,
            context.message_id,
            exc,
        )
        raise ArtifactToolError(
            f'Failed to create slides outline: {exc}'
        ) from exc
    logger.info(
        'Created slides outline %s for message %s',
        db_artifact.id,
        context.message_id,
    )
    return _tool_result_part(
        CREATE_SLIDES_OUTLINE,
        context,
        ArtifactReference(
            artifactId=db_artifact.id,
            type=db_artifact.type,
            version=db_artifact.version,
            content=db_artifact.content,
        ),
    )


async def create_markdown_file(
    session: AsyncSession,
    context: ToolContext,
    document: dict,
) -> dict:
    artifact_id = generate_artifact_id()
    try:
        db_artifact = await create_artifact(
            session,
            ArtifactCreate(
                id=artifact_id,
                conversation_id=context.conversation_id,
                message_id=context.message_id,
                owner_id=context.user_id,
                type=ArtifactType.MARKDOWN.value,
                content=document,
            ),
        )
    except (ArtifactValidationError, StoreError) as exc:
        # The model gets the failure as tool output and can retry
        logger.error('Failed to create markdown artifact %s: %s',
                     artifact_id, exc)
        return _tool_result_part(
            CREATE_MARKDOWN_FILE,
            context,
            ArtifactReference(
                artifactId=artifact_id,
                type=ArtifactType.MARKDOWN.value,
                version=INITIAL_VERSION,
                error=str(exc),
                message=f'Failed to create markdown document: {exc}',
            ),
        )
    return _tool_result_part(
        CREATE_MARKDOWN_FILE,
        context,
        ArtifactReference(
            artifactId=db_artifact.id,
            type=db_artifact.type,
            version=db_artifact.version,
            content=db_artifact.content,
            error='',
            message=(
                'Created markdown document. Simply acknowledge the creation.'
            ),
        ),
    )
