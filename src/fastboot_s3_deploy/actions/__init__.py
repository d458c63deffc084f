"""
Actions layer - Pure Python functions for archiving and publishing.

All functions are CLI-agnostic and return typed results.
These can be called directly from Python code without going through CLI.
"""

from .pack import PackResult, pack_directory
from .upload import UploadResult, upload_body, upload_file

__all__ = [
    "pack_directory",
    "PackResult",
    "upload_file",
    "upload_body",
    "UploadResult",
]
