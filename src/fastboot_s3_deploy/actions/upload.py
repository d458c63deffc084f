"""Upload actions - Single put_object requests."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class UploadResult:
    """Result of one object upload."""

    bucket: str
    key: str
    size_bytes: int = 0
    etag: str | None = None


def _etag(response: dict | None) -> str | None:
    if not response:
        return None
    etag = response.get("ETag")
    return etag.strip('"') if isinstance(etag, str) else None


def upload_file(client, bucket: str, key: str, path: Path) -> UploadResult:
    """
    Stream a local file to S3 with a single put_object request.

    Args:
        client: boto3 S3 client (or compatible)
        bucket: Target bucket
        key: Object key
        path: Local file

    Returns:
        UploadResult
    """
    with open(path, "rb") as body:
        response = client.put_object(Bucket=bucket, Key=key, Body=body)

    return UploadResult(
        bucket=bucket,
        key=key,
        size_bytes=path.stat().st_size,
        etag=_etag(response),
    )


def upload_body(client, bucket: str, key: str, body: str | bytes, content_type: str | None = None) -> UploadResult:
    """
    Upload an in-memory body with a single put_object request.

    Strings are encoded as UTF-8.

    Args:
        client: boto3 S3 client (or compatible)
        bucket: Target bucket
        key: Object key
        body: Object content
        content_type: Optional Content-Type header

    Returns:
        UploadResult
    """
    data = body.encode("utf-8") if isinstance(body, str) else body
    params = {"Bucket": bucket, "Key": key, "Body": data}
    if content_type:
        params["ContentType"] = content_type

    response = client.put_object(**params)

    return UploadResult(bucket=bucket, key=key, size_bytes=len(data), etag=_etag(response))
