#!/usr/bin/env python3
"""
Seed script to upload a directory of photos via the gallery API.

Run:
    python seed/seed_photos.py \
      --api-url <API-BASE-URL> \
      --token <ACCESS-TOKEN> \
      --dir ./photos
"""

import argparse
import mimetypes
import sys
from pathlib import Path

from aws_lambda_powertools import Logger

from client.gallery_client import GalleryClient, GalleryClientError, LocalFile
from core.utils.constants import MAX_FILES_PER_UPLOAD

logger = Logger(service="seed")

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed photos via the gallery API")

    parser.add_argument(
        "--api-url",
        required=True,
        help="API base URL (e.g. API Gateway stage URL)",
    )
    parser.add_argument(
        "--token",
        required=True,
        help="Bearer access token of the owning user",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=Path(__file__).parent / "photos",
        help="Directory of images to upload",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of photos to seed",
    )

    return parser.parse_args()


def load_photos(directory: Path, limit: int) -> list[LocalFile]:
    files: list[LocalFile] = []

    for path in sorted(directory.iterdir()):
        if path.suffix.lower() not in IMAGE_SUFFIXES:
            continue

        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        files.append((path.name, path.read_bytes(), mime_type))

        if len(files) >= limit:
            break

    return files


def seed_photos() -> None:
    try:
        args = parse_args()
        client = GalleryClient(args.api_url, token=args.token)

        photos = load_photos(args.dir, args.limit)
        logger.info(
            "Starting seeding process",
            extra={"api_base_url": args.api_url, "photo_count": len(photos)},
        )

        for start in range(0, len(photos), MAX_FILES_PER_UPLOAD):
            batch = photos[start : start + MAX_FILES_PER_UPLOAD]

            try:
                result = client.upload_photos(batch)
            except GalleryClientError as exc:
                logger.error(
                    "Failed to seed batch",
                    extra={"status": exc.status, "error": exc.message, "files": [f[0] for f in batch]},
                )
                continue

            logger.info(
                "Seeded batch",
                extra={"uploaded": result.get("uploadedCount"), "files": [f[0] for f in batch]},
            )

        logger.info("Seeding completed")

        listing = client.list_photos(limit=100)
        logger.info(
            "List photos response",
            extra={
                "photo_count": len(listing.get("photos", [])),
                "pagination": listing.get("pagination"),
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_photos()
