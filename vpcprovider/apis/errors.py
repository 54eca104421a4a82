"""
Translation of provider errors into HTTP responses.

Registered on the app in ``vpcprovider.main`` so that errors raised inside
dependencies (e.g. a missing API key while building the VPC client) are
handled the same way as errors raised by the services.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from vpcprovider.exceptions import (
    ConfigurationError,
    ProviderError,
    RemoteCallError,
    ResourceGone,
    UnknownVariantError,
)

logger = logging.getLogger(__name__)


def status_for(exc: ProviderError) -> int:
    if isinstance(exc, ConfigurationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ResourceGone):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, RemoteCallError):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_409_CONFLICT):
            return exc.status_code
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, UnknownVariantError):
        return status.HTTP_502_BAD_GATEWAY
    # ClientConfigurationError and anything unexpected
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})
