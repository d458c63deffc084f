"""
Centralized constants for FastBoot S3 Deploy.

Defaults for every optional setting live here so config resolution,
the CLI and the tests agree on them.
"""

from pathlib import Path

DEFAULT_DEPLOY_INFO = "fastboot-deploy-info.json"
DEFAULT_DEPLOY_ARCHIVE = "dist"
DEFAULT_ARCHIVE_PATH = Path("tmp") / DEFAULT_DEPLOY_ARCHIVE
DEFAULT_ARCHIVE_TYPE = "zip"

DEFAULT_PLUGIN_NAME = "fastboot-s3"

# Highest level accepted by zlib, bz2 and the zipfile deflater
MAX_COMPRESSION_LEVEL = 9

# Archive type -> tarfile write mode (None = zip)
ARCHIVE_TYPES = {
    "zip": None,
    "tar": "w",
    "tar.gz": "w:gz",
    "tgz": "w:gz",
    "tar.bz2": "w:bz2",
    "tar.xz": "w:xz",
}

DEPLOY_INFO_CONTENT_TYPE = "application/json"

# Checkmark prefix used on verbose success lines
CHECKMARK = "✔  "
