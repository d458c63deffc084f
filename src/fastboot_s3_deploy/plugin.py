"""
Archive-and-publish deploy step.

Phases, in the order a host pipeline calls them:
1. configure - validate that an S3 client can be built
2. setup     - build (or reuse) the S3 client
3. prepare   - pack the build output into an archive
4. upload    - put the archive into the bucket
5. activate  - put the deploy descriptor pointing at the archive

The plugin holds no per-run data: settings come in as an immutable
DeployConfig and everything produced along the way travels in DeployState.
"""

import traceback

from .actions import PackResult, UploadResult, pack_directory, upload_body, upload_file
from .config import DeployConfig
from .constants import CHECKMARK, DEFAULT_PLUGIN_NAME, DEPLOY_INFO_CONTENT_TYPE
from .context import DeployState
from .exceptions import ConfigurationError, OperationError
from .logger import DeployLogger
from .naming import build_archive_name, build_object_key, create_deploy_info
from .storage import create_s3_client


class DeployPlugin:
    """The archive-and-publish step."""

    def __init__(self, name: str = DEFAULT_PLUGIN_NAME, log: DeployLogger | None = None):
        """
        Initialize the plugin.

        Args:
            name: Plugin name, used as the log prefix
            log: Log sink (default: non-verbose DeployLogger)
        """
        self.name = name
        self.logger = log or DeployLogger(prefix=f"- {name}: ")

    def log(self, message, color: str | None = None, verbose: bool = False) -> None:
        self.logger.log(message, color=color, verbose=verbose)

    # Naming helpers - recomputed from config on every call

    def archive_name(self, config: DeployConfig) -> str:
        return build_archive_name(config.deploy_archive, config.revision_key, config.archive_type)

    def archive_key(self, config: DeployConfig) -> str:
        return build_object_key(self.archive_name(config), config.prefix)

    def deploy_info_key(self, config: DeployConfig) -> str:
        return build_object_key(config.deploy_info, config.prefix)

    # Phases

    def configure(self, config: DeployConfig) -> None:
        """
        Validate that enough is configured to build an S3 client.

        A client override makes region/endpoint redundant. Otherwise at
        least one of them is required.

        Raises:
            ConfigurationError: Neither region nor endpoint is set
        """
        if config.s3_client is not None:
            return

        if not config.region and not config.endpoint:
            message = "You must configure either an 'endpoint' or a 'region' to use the S3 client."
            self.log(message, color="red")
            raise ConfigurationError(message)

    def setup(self, config: DeployConfig) -> DeployState:
        """
        Build the S3 client for this run (or reuse the configured one).

        Raises:
            OperationError: The client could not be built (e.g. malformed endpoint)
        """
        client = config.s3_client
        if client is None:
            try:
                client = create_s3_client(
                    region=config.region,
                    access_key_id=config.access_key_id,
                    secret_access_key=config.secret_access_key,
                    endpoint=config.endpoint,
                )
            except Exception as e:
                raise self._fail("setup", e) from e
        return DeployState(s3_client=client)

    def prepare(self, config: DeployConfig, state: DeployState) -> PackResult:
        """
        Pack dist_dir into archive_path/<archive name>.

        Raises:
            OperationError: Packing failed
        """
        archive_name = self.archive_name(config)
        archive_file = config.archive_path / archive_name

        try:
            config.archive_path.mkdir(parents=True, exist_ok=True)
            self.log(f"saving deploy archive to {archive_file}", verbose=True)
            result = pack_directory(config.dist_dir, archive_file, config.deploy_archive, config.archive_type)
        except Exception as e:
            raise self._fail("prepare", e) from e

        state.archive_file = result.archive_file
        self.log(f"{CHECKMARK}{archive_name}", verbose=True)
        return result

    def upload(self, config: DeployConfig, state: DeployState) -> UploadResult:
        """
        Put the archive into the bucket.

        Raises:
            OperationError: Reading the archive or the put request failed
        """
        key = self.archive_key(config)
        archive_file = state.archive_file or config.archive_path / self.archive_name(config)

        self.log(f"preparing to upload to S3 bucket `{config.bucket}`", verbose=True)
        try:
            result = upload_file(state.s3_client, config.bucket, key, archive_file)
        except Exception as e:
            raise self._fail("upload", e) from e

        state.artifact_key = key
        self.log(f"{CHECKMARK}{key}", verbose=True)
        return result

    def activate(self, config: DeployConfig, state: DeployState) -> UploadResult:
        """
        Put the deploy descriptor for this revision.

        Raises:
            OperationError: The put request failed
        """
        revision_key = config.revision_key
        self.log(f"preparing to activate {revision_key}", verbose=True)

        body = create_deploy_info(config.bucket, self.archive_key(config))
        try:
            result = upload_body(
                state.s3_client,
                config.bucket,
                self.deploy_info_key(config),
                body,
                content_type=DEPLOY_INFO_CONTENT_TYPE,
            )
        except Exception as e:
            raise self._fail("activate", e) from e

        self.log(f"{CHECKMARK}activated revision {revision_key}", verbose=True)
        return result

    def _fail(self, phase: str, error: BaseException) -> OperationError:
        """Log a phase failure in red and wrap it for re-raising."""
        self.log(error, color="red")
        if error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            self.log(stack.rstrip(), color="red")
        return OperationError(phase, error)
