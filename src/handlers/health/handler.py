"""
Lambda handler reporting service liveness and configuration.
"""

from typing import Any

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import get_config
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()


@api_gateway_handler
@tracer.capture_lambda_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Report that the service is up, and which backends it can reach.

    Never touches a backing service, so it answers even when storage
    or authentication is unconfigured.
    """
    config = get_config()

    return ResponseBuilder.ok(
        {
            "status": "OK",
            "message": "Server is running",
            "mode": config.mode,
            "storageConfigured": config.storage_configured,
            "authConfigured": config.auth_configured,
        }
    )
