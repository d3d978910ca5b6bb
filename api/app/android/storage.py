# Purpose: Object storage used to publish generated Android project archives.
# Scope: android generator (bucket provisioning, uploads, public URLs).
# Dependencies: boto3 (AWS S3 or an S3-compatible endpoint).
# Notes: The pipeline only needs the four StorageClient operations.
from __future__ import annotations

import json
from typing import Protocol
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import StorageError


class StorageClient(Protocol):
    def list_buckets(self) -> list[str]: ...

    def create_bucket(self, name: str, *, public: bool) -> None: ...

    def upload_object(self, bucket: str, path: str, body: bytes, *, content_type: str, overwrite: bool) -> None: ...

    def get_public_url(self, bucket: str, path: str) -> str: ...


def s3_client(*, region: str, endpoint_url: str = ""):
    kwargs = {"region_name": region}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.client("s3", **kwargs)


def _error_code(e: ClientError) -> str:
    return str((e.response or {}).get("Error", {}).get("Code") or "")


def public_read_policy(bucket: str) -> str:
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Sid": "PublicReadGetObject",
                    "Effect": "Allow",
                    "Principal": "*",
                    "Action": "s3:GetObject",
                    "Resource": f"arn:aws:s3:::{bucket}/*",
                }
            ],
        }
    )


class S3Storage:
    def __init__(self, *, region: str, endpoint_url: str = "", public_base_url: str = "", client=None) -> None:
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/")
        self.public_base_url = public_base_url.rstrip("/")
        self.client = client or s3_client(region=region, endpoint_url=endpoint_url)

    def list_buckets(self) -> list[str]:
        try:
            resp = self.client.list_buckets()
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to list buckets: {e}") from e
        return [str(b.get("Name")) for b in resp.get("Buckets") or [] if b.get("Name")]

    def create_bucket(self, name: str, *, public: bool) -> None:
        kwargs = {"Bucket": name}
        if self.region and self.region != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            self.client.create_bucket(**kwargs)
        except ClientError as e:
            if _error_code(e) != "BucketAlreadyOwnedByYou":
                raise StorageError(str(e)) from e
        except BotoCoreError as e:
            raise StorageError(str(e)) from e

        if not public:
            return
        try:
            self.client.delete_public_access_block(Bucket=name)
            self.client.put_bucket_policy(Bucket=name, Policy=public_read_policy(name))
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to make bucket public: {e}") from e

    def upload_object(self, bucket: str, path: str, body: bytes, *, content_type: str, overwrite: bool) -> None:
        kwargs = {"Bucket": bucket, "Key": path, "Body": body, "ContentType": content_type or "application/octet-stream"}
        if not overwrite:
            kwargs["IfNoneMatch"] = "*"
        try:
            self.client.put_object(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(str(e)) from e

    def get_public_url(self, bucket: str, path: str) -> str:
        key = quote(path, safe="/")
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url}/{bucket}/{key}"
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"
