"""
Lambda handler responsible for the public photo feed.
"""

from typing import Any

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.dependencies import get_photo_service
from core.models.pagination import PageQuery
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

logger = Logger(UTC=True)
tracer = Tracer()


@api_gateway_handler
@tracer.capture_lambda_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `GET /api/photos/public?page=&limit=` (no authentication).

    Only available with a metadata store; storage-only deployments
    answer 503.
    """
    logger.info(
        "Received public photo list request",
        extra={
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    query = validate_request(PageQuery, event.get("queryStringParameters"))

    body = get_photo_service().list_public(page=query.page, limit=query.limit)

    return ResponseBuilder.ok(body)
