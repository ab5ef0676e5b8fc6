import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from lume.errors import ArtifactValidationError, StoreError


__all__ = ['handlers']


async def validation_error_handler(
    request: Request,
    exc: ArtifactValidationError,
):
    return JSONResponse(
        content=jsonable_encoder({'detail': exc.detail, 'errors': exc.errors}),
        status_code=400,
    )


async def store_error_handler(request: Request, exc: StoreError):
    # Internals stay in the logs, the caller gets an opaque failure
    logging.error(
        'Store failure while handling %s %s: %s',
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        content={'detail': 'Internal server error'},
        status_code=500,
    )


handlers = {
    ArtifactValidationError: validation_error_handler,
    StoreError: store_error_handler,
}
