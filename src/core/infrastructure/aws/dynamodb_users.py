"""DynamoDB-backed implementation of UserRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.config import AppConfig
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import MetadataStoreError
from core.repositories.user_repository import User, UserRepository
from core.utils.constants import ERROR_CODE_USER_LOOKUP_FAILED

logger = Logger(UTC=True)


class DynamoDBUsers(UserRepository):
    """User accounts stored in a DynamoDB table keyed by `user_id`."""

    def __init__(
        self,
        config: AppConfig,
        adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(
            config, config.user_table_name
        )

    def get_user(self, *, user_id: str) -> User | None:
        try:
            response = self._db.get_item(key={"user_id": user_id})
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"user_id": user_id})
            raise MetadataStoreError(
                message="Unable to look up user",
                error_code=ERROR_CODE_USER_LOOKUP_FAILED,
                details={"user_id": user_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error looking up user")
            raise MetadataStoreError(
                message="Unable to look up user",
                error_code=ERROR_CODE_USER_LOOKUP_FAILED,
                details={"user_id": user_id},
            ) from exc

        return response.get("Item")
