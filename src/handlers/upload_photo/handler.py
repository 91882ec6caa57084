"""
Lambda handler responsible for single photo upload.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.dependencies import get_photo_service
from core.utils.auth import authenticate
from core.utils.constants import METRIC_PHOTOS_UPLOADED, METRICS_NAMESPACE, SINGLE_UPLOAD_FIELD
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import parse_upload_files
from core.utils.response import ResponseBuilder

from .models import UploadPhotoResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `POST /api/upload` with one file in the `photo` field.

    The caller is authenticated before the body is looked at; the file
    is validated (image type, size) before anything is written.

    Args:
        event: API Gateway Lambda proxy event with a multipart body
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response describing the stored file
    """
    logger.info(
        "Received photo upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    identity = authenticate(event)
    service = get_photo_service()

    uploads = parse_upload_files(
        event,
        allowed_fields={SINGLE_UPLOAD_FIELD},
        max_files=1,
    )
    descriptors = service.upload(identity, uploads)

    metrics.add_metric(name=METRIC_PHOTOS_UPLOADED, unit=MetricUnit.Count, value=len(descriptors))

    response = UploadPhotoResponse(
        message="File uploaded successfully",
        file=descriptors[0],
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
