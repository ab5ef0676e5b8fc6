import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from lume.errors import DataNotFoundError, PermissionDenied


__all__ = ['handlers']


def _detail_response(
    request: Request,
    exc: Exception,
    status_code: int,
) -> JSONResponse:
    logging.info(
        '%s %s rejected with %d: %s',
        request.method,
        request.url.path,
        status_code,
        exc,
    )
    return JSONResponse(content={'detail': str(exc)}, status_code=status_code)


async def artifact_not_found_handler(
    request: Request,
    exc: DataNotFoundError,
):
    return _detail_response(request, exc, status.HTTP_404_NOT_FOUND)


async def artifact_access_denied_handler(
    request: Request,
    exc: PermissionDenied,
):
    return _detail_response(request, exc, status.HTTP_403_FORBIDDEN)


handlers = {
    DataNotFoundError: artifact_not_found_handler,
    PermissionDenied: artifact_access_denied_handler,
}
