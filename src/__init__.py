"""Photo Gallery Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless photo gallery using AWS Lambda, S3, Cognito and DynamoDB"
)

__all__ = ["handlers", "core", "client"]
