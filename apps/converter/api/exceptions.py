"""
Maps conversion errors onto HTTP responses.

Input errors become 400 responses; upstream failures become 502 since the
fault lies with the rate provider, not the caller.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.converter.domain.exceptions import (
    ConversionInputError,
    InvalidAmount,
    InvalidCurrencyCode,
    UnknownCurrency,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def converter_exception_handler(exc, context):
    if isinstance(exc, ConversionInputError):
        body = {"error": "Bad Request", "message": str(exc)}
        if isinstance(exc, InvalidAmount):
            body.update({"field": "amount", "reason": exc.reason})
        elif isinstance(exc, InvalidCurrencyCode):
            body.update({"field": exc.field, "reason": exc.reason})
        elif isinstance(exc, UnknownCurrency):
            body["code"] = exc.code
        logger.debug("Rejected conversion input: %s", exc)
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, UpstreamError):
        logger.error("Upstream rate provider failure: %s", exc)
        return Response(
            {"error": "Bad Gateway", "message": str(exc), "upstream_status": exc.status},
            status=status.HTTP_502_BAD_GATEWAY,
        )

    return exception_handler(exc, context)
