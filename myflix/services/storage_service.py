import logging
import posixpath
from typing import BinaryIO, Iterator, List, NamedTuple, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request

from myflix.core.config import Settings
from myflix.core.errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class StoredImage(NamedTuple):
    body: Iterator[bytes]
    content_length: int
    content_type: str


def image_key(filename: Optional[str]) -> str:
    """
    Reduce an uploaded or requested file name to a bare object key.

    Directory parts (either separator) are dropped so a client can never
    write outside the flat image namespace of the bucket.
    """
    key = posixpath.basename((filename or "").replace("\\", "/")).strip()
    if key in ("", ".", ".."):
        raise ValueError("A file name is required.")
    return key


class ImageStorage:
    """
    Thin gateway over an S3 bucket holding images keyed by file name.
    """

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStorage":
        client = boto3.client("s3", region_name=settings.AWS_REGION)
        return cls(client, settings.BUCKET_NAME)

    def list_images(self) -> List[dict]:
        try:
            response = self.client.list_objects_v2(Bucket=self.bucket)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("Listing bucket %s failed", self.bucket)
            raise StorageError("Object storage request failed.") from exc
        return [
            {
                "Key": obj["Key"],
                "Size": obj.get("Size"),
                "LastModified": obj.get("LastModified"),
                "ETag": obj.get("ETag"),
            }
            for obj in response.get("Contents", [])
        ]

    def upload_image(self, key: str, fileobj: BinaryIO, content_type: Optional[str]) -> dict:
        extra = {"ContentType": content_type} if content_type else {}
        try:
            response = self.client.put_object(
                Bucket=self.bucket, Key=key, Body=fileobj, **extra
            )
        except (ClientError, BotoCoreError) as exc:
            logger.exception("Uploading %s to bucket %s failed", key, self.bucket)
            raise StorageError("Object storage request failed.") from exc
        logger.info("Uploaded image %s", key)
        return {"Key": key, "ETag": response.get("ETag")}

    def get_image(self, key: str) -> StoredImage:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in MISSING_KEY_CODES:
                raise NotFoundError(f"{key} was not found.") from exc
            logger.exception("Fetching %s from bucket %s failed", key, self.bucket)
            raise StorageError("Object storage request failed.") from exc
        except BotoCoreError as exc:
            logger.exception("Fetching %s from bucket %s failed", key, self.bucket)
            raise StorageError("Object storage request failed.") from exc
        return StoredImage(
            body=response["Body"].iter_chunks(),
            content_length=response["ContentLength"],
            content_type=response.get("ContentType") or "application/octet-stream",
        )


def get_storage(request: Request) -> ImageStorage:
    return request.app.state.storage
