"""
FastBoot S3 Deploy (fsd) - Archive-and-publish step for deploy pipelines

Packs a built web application and publishes it to S3 with:
- Deterministic archive naming per revision
- zip and tar archive formats at maximum compression
- Custom endpoints for S3-compatible stores
- A small JSON deploy descriptor for runtime servers
"""

import logging

__version__ = "0.1.0"
__package_name__ = "fastboot-s3-deploy"
__short_name__ = "fsd"

logging.getLogger(__name__).addHandler(logging.NullHandler())
