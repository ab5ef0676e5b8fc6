import logging

import sentry_sdk

from lume import __version__
from lume.config import Settings, settings
from lume.errors import (
    ArtifactValidationError,
    DataNotFoundError,
    PermissionDenied,
)

__all__ = ['sentry_init']


# Client errors already answered with 4xx, not worth an event
EXPECTED_ERRORS = [
    ConnectionResetError,
    ArtifactValidationError,
    DataNotFoundError,
    PermissionDenied,
]


def sentry_init(config: Settings = settings) -> bool:
    if not config.sentry_dsn:
        logging.debug('Sentry DSN is not configured, reporting disabled')
        return False
    sentry_sdk.init(
        dsn=config.sentry_dsn,
        traces_sample_rate=config.sentry_traces_sample_rate,
        environment=config.sentry_environment,
        release=f'lume@{__version__}',
        ignore_errors=EXPECTED_ERRORS,
    )
    return True
