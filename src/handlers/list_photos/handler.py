"""
Lambda handler responsible for listing the caller's photos.
"""

from typing import Any

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.dependencies import get_photo_service
from core.models.pagination import PageQuery
from core.utils.auth import authenticate
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

logger = Logger(UTC=True)
tracer = Tracer()


@api_gateway_handler
@tracer.capture_lambda_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `GET /api/photos?page=&limit=`.

    With a metadata store the response is one page of records plus the
    pagination envelope; without one it is the caller's storage listing.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received photo list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    identity = authenticate(event)
    query = validate_request(PageQuery, event.get("queryStringParameters"))

    body = get_photo_service().list_photos(identity, page=query.page, limit=query.limit)

    return ResponseBuilder.ok(body)
