"""Shared pytest fixtures for fastboot-s3-deploy tests."""

import boto3
import pytest
from moto import mock_aws
from rich.console import Console
from typer.testing import CliRunner

from fastboot_s3_deploy.config import resolve_config
from fastboot_s3_deploy.logger import DeployLogger

BUCKET = "my-bucket"


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def dist_dir(tmp_path):
    """Create a build output directory with nested files."""
    build = tmp_path / "build"
    (build / "assets").mkdir(parents=True)
    (build / "index.html").write_text("<html><body>app</body></html>")
    (build / "package.json").write_text('{"name": "app"}')
    (build / "assets" / "app.js").write_text("console.log('app');")
    (build / "assets" / "app.css").write_text("body { margin: 0; }")
    return build


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def s3_client(aws_credentials):
    """Moto-backed S3 client with the test bucket created."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def recording_logger():
    """DeployLogger that records every call and prints to a string buffer."""

    class RecordingLogger(DeployLogger):
        def __init__(self):
            super().__init__(verbose=True, console=Console(record=True, width=200))
            self.calls = []

        def log(self, message, color=None, verbose=False):
            self.calls.append((str(message), color, verbose))
            super().log(message, color=color, verbose=verbose)

    return RecordingLogger()


@pytest.fixture
def make_config(tmp_path, dist_dir):
    """Build a DeployConfig for the sample build directory."""

    def _make(**overrides):
        raw = {
            "bucket": BUCKET,
            "region": "us-east-1",
            "revisionKey": "abc123",
            "distDir": dist_dir,
            "archivePath": tmp_path / "tmp",
        }
        raw.update(overrides)
        return resolve_config(raw)

    return _make


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Keep user config files and FSD_* variables out of tests."""
    for var in ("FSD_BUCKET", "FSD_PREFIX", "FSD_REGION", "FSD_ENDPOINT", "FSD_ACCESS_KEY_ID", "FSD_SECRET_ACCESS_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("FSD_CONFIG_DIR", str(tmp_path / "no-config"))
