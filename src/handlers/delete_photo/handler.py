"""
Lambda handler responsible for deleting one of the caller's photos.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.dependencies import get_photo_service
from core.utils.auth import authenticate
from core.utils.constants import METRIC_PHOTOS_DELETED, METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import DeletePhotoRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `DELETE /api/photos/{key+}`.

    This function:
    - Authenticates the caller
    - Resolves the target by record id or storage key, enforcing ownership
    - Deletes the storage object, then (with a metadata store) the record

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received photo delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    identity = authenticate(event)

    path_params = event.get("pathParameters") or {}
    request = validate_request(DeletePhotoRequest, {"photo_ref": path_params.get("key")})

    get_photo_service().delete_photo(identity, request.photo_ref)

    metrics.add_metric(name=METRIC_PHOTOS_DELETED, unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok({"message": "Photo deleted successfully"})
