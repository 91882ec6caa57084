"""
Lambda handler responsible for batch photo upload.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.dependencies import get_photo_service
from core.utils.auth import authenticate
from core.utils.constants import (
    MAX_FILES_PER_UPLOAD,
    METRIC_PHOTOS_UPLOADED,
    METRICS_NAMESPACE,
    MULTI_UPLOAD_FIELDS,
)
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import parse_upload_files
from core.utils.response import ResponseBuilder

from .models import UploadPhotosResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `POST /api/upload-multiple` with up to 10 files in `photos`.

    One invalid file rejects the whole batch before any write. Files are
    then stored in submission order; a storage failure part way through
    keeps the files already stored.

    Args:
        event: API Gateway Lambda proxy event with a multipart body
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response listing the stored files
    """
    logger.info(
        "Received batch photo upload request",
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
        allowed_fields=MULTI_UPLOAD_FIELDS,
        max_files=MAX_FILES_PER_UPLOAD,
    )
    descriptors = service.upload(identity, uploads)

    metrics.add_metric(name=METRIC_PHOTOS_UPLOADED, unit=MetricUnit.Count, value=len(descriptors))

    response = UploadPhotosResponse(
        message=f"{len(descriptors)} files uploaded successfully",
        uploaded_count=len(descriptors),
        files=descriptors,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
