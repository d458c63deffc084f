"""
Configuration management with YAML loading and environment variable support.

Settings are resolved in two steps:
1. ``load_config`` reads a raw mapping (YAML file + FSD_* environment).
2. ``resolve_config`` evaluates dynamic values against the pipeline
   context once and returns an immutable ``DeployConfig``.
"""

import functools
import inspect
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    DEFAULT_ARCHIVE_PATH,
    DEFAULT_ARCHIVE_TYPE,
    DEFAULT_DEPLOY_ARCHIVE,
    DEFAULT_DEPLOY_INFO,
)
from .context import DeployContext
from .exceptions import ConfigurationError

# Setting name (as written in config files) -> DeployConfig field
CONFIG_KEYS = {
    "bucket": "bucket",
    "prefix": "prefix",
    "region": "region",
    "endpoint": "endpoint",
    "accessKeyId": "access_key_id",
    "secretAccessKey": "secret_access_key",
    "s3Client": "s3_client",
    "archivePath": "archive_path",
    "archiveType": "archive_type",
    "deployArchive": "deploy_archive",
    "deployInfo": "deploy_info",
    "distDir": "dist_dir",
    "revisionKey": "revision_key",
}

# Environment fallbacks, only used when the key is absent from the raw mapping
ENV_KEYS = {
    "bucket": "FSD_BUCKET",
    "prefix": "FSD_PREFIX",
    "region": "FSD_REGION",
    "endpoint": "FSD_ENDPOINT",
    "access_key_id": "FSD_ACCESS_KEY_ID",
    "secret_access_key": "FSD_SECRET_ACCESS_KEY",
}

SECRET_FIELDS = {"access_key_id", "secret_access_key"}


@dataclass(frozen=True)
class DeployConfig:
    """Fully resolved settings for one deploy run."""

    bucket: str
    revision_key: str
    dist_dir: Path
    prefix: str | None = None
    region: str | None = None
    endpoint: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = field(default=None, repr=False)
    s3_client: Any = field(default=None, repr=False, compare=False)
    archive_path: Path = DEFAULT_ARCHIVE_PATH
    archive_type: str = DEFAULT_ARCHIVE_TYPE
    deploy_archive: str = DEFAULT_DEPLOY_ARCHIVE
    deploy_info: str = DEFAULT_DEPLOY_INFO

    def describe(self) -> dict[str, str]:
        """Printable view of the settings with credentials masked."""
        result = {}
        for name in CONFIG_KEYS.values():
            value = getattr(self, name)
            if value is None:
                result[name] = "-"
            elif name in SECRET_FIELDS:
                result[name] = "****"
            elif name == "s3_client":
                result[name] = type(value).__name__
            else:
                result[name] = str(value)
        return result


def _normalize_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase setting names onto field names; snake_case passes through."""
    fields = set(CONFIG_KEYS.values())
    normalized = {}
    for key, value in raw.items():
        if key in CONFIG_KEYS:
            normalized[CONFIG_KEYS[key]] = value
        elif key in fields:
            normalized[key] = value
    return normalized


def _is_dynamic(value: Any) -> bool:
    """Functions of the context, as opposed to plain values or client objects."""
    return inspect.isfunction(value) or inspect.ismethod(value) or isinstance(value, functools.partial)


def _apply_env(values: dict[str, Any]) -> dict[str, Any]:
    """Fill unset keys from FSD_* environment variables."""
    merged = dict(values)
    for name, env_var in ENV_KEYS.items():
        if merged.get(name) is None and (value := os.environ.get(env_var)):
            merged[name] = value
    return merged


def resolve_config(raw: dict[str, Any], context: DeployContext | None = None) -> DeployConfig:
    """
    Build the immutable configuration for one run.

    Function values are invoked once with the context. Unset ``dist_dir``,
    ``revision_key`` and ``s3_client`` fall back to the context.

    Args:
        raw: Settings mapping (camelCase or snake_case keys)
        context: Host pipeline context

    Returns:
        DeployConfig

    Raises:
        ConfigurationError: bucket or revision key cannot be determined
    """
    context = context or DeployContext()
    values = _apply_env(_normalize_keys(raw))

    resolved = {}
    for name, value in values.items():
        resolved[name] = value(context) if _is_dynamic(value) else value

    if resolved.get("dist_dir") is None:
        resolved["dist_dir"] = context.dist_dir
    if resolved.get("revision_key") is None:
        resolved["revision_key"] = context.revision_key
    if resolved.get("s3_client") is None:
        resolved["s3_client"] = context.s3_client

    if not resolved.get("bucket"):
        raise ConfigurationError("Missing required config: 'bucket'")
    if not resolved.get("revision_key"):
        raise ConfigurationError(
            "Could not determine a revision key (pass --revision or provide revision data)"
        )
    if resolved.get("dist_dir") is None:
        raise ConfigurationError("Missing config: 'distDir' (no build output directory in context)")

    # Drop explicit None values so dataclass defaults apply
    kwargs = {key: value for key, value in resolved.items() if value is not None}
    kwargs["dist_dir"] = Path(kwargs["dist_dir"])
    if "archive_path" in kwargs:
        kwargs["archive_path"] = Path(kwargs["archive_path"])
    kwargs["bucket"] = str(kwargs["bucket"])
    kwargs["revision_key"] = str(kwargs["revision_key"])

    return DeployConfig(**kwargs)


def _get_default_config_dir() -> Path:
    """Get default config directory."""
    if config_dir := os.environ.get("FSD_CONFIG_DIR"):
        return Path(config_dir)

    if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config) / "fastboot-s3-deploy"

    return Path.home() / ".config" / "fastboot-s3-deploy"


def load_config(config_path: Path | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """
    Load the raw settings mapping from YAML.

    Args:
        config_path: Explicit config file (default: searches standard locations)
        config_dir: Config directory to search first

    Returns:
        Raw settings mapping (empty if no file found)

    Raises:
        ConfigurationError: The file does not contain a mapping
    """
    if config_dir is None:
        config_dir = _get_default_config_dir()

    if config_path is None:
        search_paths = [
            config_dir / "deploy.yaml",
            Path.cwd() / "fsd.yaml",
            Path.cwd() / "config" / "deploy.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = path
                break

    if config_path is None or not config_path.exists():
        return {}

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

    return data
