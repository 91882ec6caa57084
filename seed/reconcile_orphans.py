#!/usr/bin/env python3
"""
Find photo records whose storage object no longer exists, and optionally
remove them. Reads the same environment as the Lambda functions.

Run:
    python seed/reconcile_orphans.py --owner-id <SUBJECT-ID> [--apply]
"""

import argparse
import sys

from aws_lambda_powertools import Logger

from core.config import get_config
from core.dependencies import build_photo_service
from core.services.metadata_photo_service import MetadataPhotoService

logger = Logger(service="reconcile")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile orphaned photo records")

    parser.add_argument(
        "--owner-id",
        required=True,
        help="Subject id whose records should be checked",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Delete orphaned records (default is a dry run)",
    )

    return parser.parse_args()


def reconcile() -> None:
    try:
        args = parse_args()
        service = build_photo_service(get_config())

        if not isinstance(service, MetadataPhotoService):
            logger.error("Reconciliation needs PHOTO_METADATA_TABLE_NAME to be set")
            sys.exit(2)

        orphans = service.reconcile_orphans(args.owner_id, dry_run=not args.apply)

        for record in orphans:
            logger.info(
                "Orphaned record",
                extra={"photo_id": record.id, "storage_key": record.storage_key},
            )

        logger.info(
            "Reconciliation completed",
            extra={"orphans": len(orphans), "applied": args.apply},
        )

    except Exception as exc:
        logger.exception("Reconciliation failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    reconcile()
