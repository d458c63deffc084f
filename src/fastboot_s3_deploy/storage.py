"""
S3 client construction.

Works against AWS and S3-compatible stores (MinIO, R2, RunPod volumes)
through ``endpoint``.
"""

import logging

import boto3

log = logging.getLogger(__name__)


def create_s3_client(
    region: str | None = None,
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    endpoint: str | None = None,
):
    """
    Create a boto3 S3 client.

    Unset credentials fall through to boto3's default chain
    (environment, shared config, instance profile).

    Args:
        region: Region name
        access_key_id: Access key id
        secret_access_key: Secret access key
        endpoint: Custom endpoint URL for S3-compatible stores

    Returns:
        boto3 S3 client
    """
    client = boto3.client(
        "s3",
        region_name=region,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        endpoint_url=endpoint,
    )
    log.debug(f"S3 client initialized (region={region}, endpoint={endpoint})")
    return client
