import logging
import typing

from lume.config import settings
from lume.models import Artifact

__all__ = ['can_access', 'can_modify']


def can_access(artifact: Artifact, user_id: typing.Optional[str]) -> bool:
    if not artifact.owner_id:
        return True
    return artifact.owner_id == user_id


def can_modify(artifact: Artifact, user_id: typing.Optional[str]) -> bool:
    if artifact.owner_id:
        return artifact.owner_id == user_id
    logging.debug(
        'Artifact %s has no owner, ownerless writes allowed: %s',
        artifact.id,
        settings.allow_ownerless_writes,
    )
    return settings.allow_ownerless_writes
