"""Archive names, object keys and the deploy descriptor body."""

import json


def build_archive_name(deploy_archive: str, revision_key: str, archive_type: str) -> str:
    """
    Build the archive file name for a revision.

    Examples:
        ("dist", "abc123", "zip")    -> dist-abc123.zip
        ("app", "r1", "tar.gz")      -> app-r1.tar.gz
    """
    return f"{deploy_archive}-{revision_key}.{archive_type}"


def build_object_key(name: str, prefix: str | None = None) -> str:
    """Prepend the prefix namespace to an object name, if one is set."""
    if prefix:
        return f"{prefix}/{name}"
    return name


def create_deploy_info(bucket: str, key: str) -> str:
    """
    Serialize the deploy descriptor.

    Compact separators so the body is exactly ``{"bucket":"...","key":"..."}``.
    """
    return json.dumps({"bucket": bucket, "key": key}, separators=(",", ":"))
