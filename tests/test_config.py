"""Tests for configuration loading and resolution."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from fastboot_s3_deploy.config import DeployConfig, load_config, resolve_config
from fastboot_s3_deploy.constants import DEFAULT_ARCHIVE_PATH
from fastboot_s3_deploy.context import DeployContext
from fastboot_s3_deploy.exceptions import ConfigurationError


@pytest.fixture
def context(tmp_path):
    """Pipeline context with a dist dir and revision metadata."""
    return DeployContext(
        dist_dir=tmp_path / "dist",
        revision_data={"revisionKey": "rev-from-data"},
    )


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_defaults(self, context):
        """Test unset settings fall back to defaults."""
        config = resolve_config({"bucket": "my-bucket"}, context)

        assert config.archive_path == DEFAULT_ARCHIVE_PATH
        assert config.archive_path == Path("tmp") / "dist"
        assert config.archive_type == "zip"
        assert config.deploy_archive == "dist"
        assert config.deploy_info == "fastboot-deploy-info.json"
        assert config.prefix is None
        assert config.s3_client is None

    def test_context_defaults(self, context):
        """Test dist dir and revision key come from the context."""
        config = resolve_config({"bucket": "my-bucket"}, context)

        assert config.dist_dir == context.dist_dir
        assert config.revision_key == "rev-from-data"

    def test_command_line_revision_wins(self, tmp_path):
        """Test --revision takes precedence over revision metadata."""
        context = DeployContext(
            dist_dir=tmp_path,
            command_options={"revision": "cli-rev"},
            revision_data={"revisionKey": "data-rev"},
        )
        config = resolve_config({"bucket": "b"}, context)
        assert config.revision_key == "cli-rev"

    def test_explicit_revision_wins(self, context):
        """Test an explicit revisionKey setting overrides the context."""
        config = resolve_config({"bucket": "b", "revisionKey": "explicit"}, context)
        assert config.revision_key == "explicit"

    def test_camel_and_snake_keys(self, context):
        """Test both key spellings are accepted."""
        config = resolve_config(
            {"bucket": "b", "accessKeyId": "AKIA", "secret_access_key": "secret", "archiveType": "tar.gz"},
            context,
        )
        assert config.access_key_id == "AKIA"
        assert config.secret_access_key == "secret"
        assert config.archive_type == "tar.gz"

    def test_unknown_keys_ignored(self, context):
        """Test unrelated keys do not break resolution."""
        config = resolve_config({"bucket": "b", "somethingElse": 1}, context)
        assert config.bucket == "b"

    def test_callables_invoked_once_with_context(self, context):
        """Test dynamic settings are evaluated against the context."""
        calls = []

        def prefix(ctx):
            calls.append(ctx)
            return f"releases/{ctx.revision_key}"

        config = resolve_config({"bucket": "b", "prefix": prefix}, context)

        assert config.prefix == "releases/rev-from-data"
        assert calls == [context]

    def test_s3_client_from_context(self, tmp_path):
        """Test a client supplied by the pipeline becomes the override."""
        client = object()
        context = DeployContext(dist_dir=tmp_path, command_options={"revision": "r"}, s3_client=client)
        config = resolve_config({"bucket": "b"}, context)
        assert config.s3_client is client

    def test_paths_coerced(self, context):
        """Test string paths are converted to Path objects."""
        config = resolve_config({"bucket": "b", "distDir": "build", "archivePath": "out/archives"}, context)
        assert config.dist_dir == Path("build")
        assert config.archive_path == Path("out/archives")

    def test_missing_bucket(self, context):
        """Test bucket is required."""
        with pytest.raises(ConfigurationError, match="bucket"):
            resolve_config({}, context)

    def test_missing_revision(self, tmp_path):
        """Test a revision key is required."""
        with pytest.raises(ConfigurationError, match="revision"):
            resolve_config({"bucket": "b"}, DeployContext(dist_dir=tmp_path))

    def test_missing_dist_dir(self):
        """Test a dist dir is required."""
        context = DeployContext(command_options={"revision": "r"})
        with pytest.raises(ConfigurationError, match="distDir"):
            resolve_config({"bucket": "b"}, context)

    def test_env_fallback(self, context, monkeypatch):
        """Test FSD_* environment variables fill unset keys."""
        monkeypatch.setenv("FSD_BUCKET", "env-bucket")
        monkeypatch.setenv("FSD_REGION", "eu-west-1")

        config = resolve_config({}, context)

        assert config.bucket == "env-bucket"
        assert config.region == "eu-west-1"

    def test_env_does_not_override(self, context, monkeypatch):
        """Test explicit settings win over the environment."""
        monkeypatch.setenv("FSD_BUCKET", "env-bucket")
        config = resolve_config({"bucket": "file-bucket"}, context)
        assert config.bucket == "file-bucket"

    def test_scalar_values_stringified(self, context):
        """Test numeric bucket and revision values from YAML become strings."""
        config = resolve_config({"bucket": 123, "revisionKey": 42}, context)

        assert config.bucket == "123"
        assert config.revision_key == "42"

    def test_immutable(self, context):
        """Test resolved config cannot be modified."""
        config = resolve_config({"bucket": "b"}, context)
        with pytest.raises(FrozenInstanceError):
            config.bucket = "other"


class TestDescribe:
    """Tests for DeployConfig.describe."""

    def test_masks_credentials(self, tmp_path):
        """Test secrets are never printed."""
        config = DeployConfig(
            bucket="b",
            revision_key="r",
            dist_dir=tmp_path,
            access_key_id="AKIA",
            secret_access_key="topsecret",
        )
        described = config.describe()

        assert described["access_key_id"] == "****"
        assert described["secret_access_key"] == "****"
        assert "topsecret" not in str(described)
        assert described["prefix"] == "-"
        assert described["bucket"] == "b"

    def test_repr_hides_secret(self, tmp_path):
        """Test the secret key is excluded from repr."""
        config = DeployConfig(bucket="b", revision_key="r", dist_dir=tmp_path, secret_access_key="topsecret")
        assert "topsecret" not in repr(config)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path):
        """Test a missing file yields an empty mapping."""
        assert load_config(tmp_path / "missing.yaml", config_dir=tmp_path) == {}

    def test_valid_file(self, tmp_path):
        """Test loading settings from YAML."""
        config_file = tmp_path / "deploy.yaml"
        config_file.write_text("""
bucket: my-bucket
region: us-east-1
prefix: releases
archiveType: tar.gz
""")
        data = load_config(config_file)

        assert data == {
            "bucket": "my-bucket",
            "region": "us-east-1",
            "prefix": "releases",
            "archiveType": "tar.gz",
        }

    def test_empty_file(self, tmp_path):
        """Test an empty file yields an empty mapping."""
        config_file = tmp_path / "deploy.yaml"
        config_file.write_text("")
        assert load_config(config_file) == {}

    def test_non_mapping(self, tmp_path):
        """Test a list at the top level is rejected."""
        config_file = tmp_path / "deploy.yaml"
        config_file.write_text("- bucket\n- region\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file)

    def test_searches_config_dir(self, tmp_path):
        """Test deploy.yaml in the config dir is found without a path."""
        (tmp_path / "deploy.yaml").write_text("bucket: found\n")
        assert load_config(config_dir=tmp_path) == {"bucket": "found"}

    def test_config_dir_from_env(self, tmp_path, monkeypatch):
        """Test FSD_CONFIG_DIR selects the config directory."""
        (tmp_path / "deploy.yaml").write_text("bucket: from-env-dir\n")
        monkeypatch.setenv("FSD_CONFIG_DIR", str(tmp_path))
        assert load_config()["bucket"] == "from-env-dir"
