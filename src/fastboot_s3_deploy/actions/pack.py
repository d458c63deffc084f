"""Pack actions - Directory archiving."""

import tarfile
import zipfile
from dataclasses import dataclass
from pathlib import Path

from ..constants import ARCHIVE_TYPES, MAX_COMPRESSION_LEVEL


@dataclass
class PackResult:
    """Result of packing a directory."""

    archive_file: Path
    files_packed: int = 0
    size_bytes: int = 0


def _excluded_subpath(source: Path, archive_file: Path) -> Path | None:
    """
    Part of source that must not be packed, relative to source.

    A staging directory inside source is skipped whole, so the archive being
    written and archives from earlier runs stay out. When the staging
    directory is source itself only the archive file is skipped.
    """
    root = source.resolve()
    staging = archive_file.parent.resolve()
    if staging == root:
        return Path(archive_file.name)
    if root in staging.parents:
        return staging.relative_to(root)
    return None


def _iter_entries(source: Path, exclude: Path | None = None) -> list[Path]:
    """Files and directories under source, parents before children."""
    entries = []
    for path in sorted(source.rglob("*")):
        rel = path.relative_to(source)
        if exclude is not None and (rel == exclude or exclude in rel.parents):
            continue
        entries.append(path)
    return entries


def _pack_zip(source: Path, archive_file: Path, root_name: str, exclude: Path | None) -> int:
    packed = 0
    with zipfile.ZipFile(
        archive_file,
        "w",
        compression=zipfile.ZIP_DEFLATED,
        compresslevel=MAX_COMPRESSION_LEVEL,
    ) as zf:
        zf.write(source, root_name)
        for path in _iter_entries(source, exclude):
            arcname = f"{root_name}/{path.relative_to(source).as_posix()}"
            zf.write(path, arcname)
            if path.is_file():
                packed += 1
    return packed


def _pack_tar(source: Path, archive_file: Path, root_name: str, mode: str, exclude: Path | None) -> int:
    kwargs = {}
    if mode in ("w:gz", "w:bz2"):
        kwargs["compresslevel"] = MAX_COMPRESSION_LEVEL
    elif mode == "w:xz":
        kwargs["preset"] = MAX_COMPRESSION_LEVEL

    packed = 0
    with tarfile.open(archive_file, mode, **kwargs) as tar:
        tar.add(source, arcname=root_name, recursive=False)
        for path in _iter_entries(source, exclude):
            tar.add(path, arcname=f"{root_name}/{path.relative_to(source).as_posix()}", recursive=False)
            if path.is_file():
                packed += 1
    return packed


def pack_directory(source: Path, archive_file: Path, root_name: str, archive_type: str) -> PackResult:
    """
    Pack a directory into an archive under a single root folder.

    The archive file is closed before this returns.

    Args:
        source: Directory to archive
        archive_file: Output archive path (parent must exist)
        root_name: Folder name every entry is stored under
        archive_type: One of ARCHIVE_TYPES

    Returns:
        PackResult with file count and archive size

    Raises:
        ValueError: Unsupported archive type
        FileNotFoundError: Source directory missing
        NotADirectoryError: Source is not a directory
    """
    if archive_type not in ARCHIVE_TYPES:
        supported = ", ".join(ARCHIVE_TYPES)
        raise ValueError(f"Unsupported archive type: {archive_type} (supported: {supported})")

    if not source.exists():
        raise FileNotFoundError(f"Directory not found: {source}")

    if not source.is_dir():
        raise NotADirectoryError(f"Not a directory: {source}")

    mode = ARCHIVE_TYPES[archive_type]
    exclude = _excluded_subpath(source, archive_file)
    if mode is None:
        packed = _pack_zip(source, archive_file, root_name, exclude)
    else:
        packed = _pack_tar(source, archive_file, root_name, mode, exclude)

    return PackResult(
        archive_file=archive_file,
        files_packed=packed,
        size_bytes=archive_file.stat().st_size,
    )
