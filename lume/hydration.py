"""
Artifact hydration for conversation history.

Tool-result parts keep a snapshot of the artifact they produced
(``artifactId``, ``type``, ``version``, ``content``). Artifacts can be
edited after the snapshot was taken, so before the history is handed to
a model every snapshot is replaced with the latest stored state.
"""

import logging
import typing

from sqlalchemy.ext.asyncio import AsyncSession

from lume.constants import TOOL_PART_PREFIX, ToolPartState
from lume.crud.artifacts import get_latest_artifact_states
from lume.errors import StoreError

__all__ = [
    'collect_artifact_ids',
    'get_artifact_reference',
    'hydrate_artifacts_in_messages',
    'replace_artifact_references',
]

logger = logging.getLogger(__name__)

Message = typing.Mapping[str, typing.Any]
Part = typing.Mapping[str, typing.Any]


def get_artifact_reference(part: typing.Any) -> typing.Optional[dict]:
    """
    Returns the artifact snapshot carried by a message part, if any.

    Only tool-result parts whose tool call has completed are considered,
    parts that are still streaming input or failed are left alone.
    """
    if not isinstance(part, typing.Mapping):
        return None
    part_type = part.get('type')
    if not isinstance(part_type, str) or not part_type.startswith(
        TOOL_PART_PREFIX
    ):
        return None
    state = part.get('state')
    if state is not None and state != ToolPartState.OUTPUT_AVAILABLE.value:
        return None
    output = part.get('output')
    if not isinstance(output, typing.Mapping):
        return None
    artifact_id = output.get('artifactId')
    if not isinstance(artifact_id, str) or not artifact_id:
        return None
    return output


def _get_parts(message: Message) -> typing.Optional[typing.Sequence[Part]]:
    if not isinstance(message, typing.Mapping):
        return None
    parts = message.get('parts')
    if not isinstance(parts, (list, tuple)):
        return None
    return parts


def collect_artifact_ids(
    messages: typing.Sequence[Message],
) -> typing.List[str]:
    artifact_ids = {}
    for message in messages:
        for part in _get_parts(message) or ():
            reference = get_artifact_reference(part)
            if reference is not None:
                artifact_ids.setdefault(reference['artifactId'], None)
    return list(artifact_ids)


def _hydrate_part(part: Part, latest: typing.Mapping[str, dict]) -> Part:
    reference = get_artifact_reference(part)
    if reference is None:
        return part
    state = latest.get(reference['artifactId'])
    if state is None:
        logger.debug(
            'Artifact %s is gone, keeping snapshot at version %s',
            reference['artifactId'],
            reference.get('version'),
        )
        return part
    return {
        **part,
        'output': {
            **reference,
            'artifactId': state['id'],
            'type': state['type'],
            'version': state['version'],
            'content': state['content'],
        },
    }


def replace_artifact_references(
    messages: typing.Sequence[Message],
    latest: typing.Mapping[str, dict],
) -> typing.List[Message]:
    hydrated = []
    for message in messages:
        parts = _get_parts(message)
        if parts is None:
            hydrated.append(message)
            continue
        hydrated.append({
            **message,
            'parts': [_hydrate_part(part, latest) for part in parts],
        })
    return hydrated


async def hydrate_artifacts_in_messages(
    session: AsyncSession,
    messages: typing.Sequence[Message],
) -> typing.Sequence[Message]:
    artifact_ids = collect_artifact_ids(messages)
    if not artifact_ids:
        return messages

    try:
        latest = await get_latest_artifact_states(session, artifact_ids)
    except StoreError:
        logger.warning(
            'Cannot fetch %d artifacts, using message snapshots as is',
            len(artifact_ids),
            exc_info=True,
        )
        return messages

    logger.debug(
        'Hydrating %d artifact references, %d found in store',
        len(artifact_ids),
        len(latest),
    )
    return replace_artifact_references(messages, latest)
