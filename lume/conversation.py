import typing

from sqlalchemy.ext.asyncio import AsyncSession

from lume.hydration import hydrate_artifacts_in_messages

__all__ = ['build_model_context']


async def build_model_context(
    session: AsyncSession,
    history: typing.Sequence[typing.Mapping[str, typing.Any]],
    new_message: typing.Optional[typing.Mapping[str, typing.Any]] = None,
) -> typing.Sequence[typing.Mapping[str, typing.Any]]:
    """
    Assembles the message list handed to the model for the next turn.

    ``history`` is expected in stored (chronological) order, the latest
    user message is appended to it and every embedded artifact snapshot
    is refreshed to the artifact's current version.
    """
    messages = list(history)
    if new_message is not None:
        messages.append(new_message)
    return await hydrate_artifacts_in_messages(session, messages)
