from __future__ import annotations

import logging
from collections.abc import Callable

from . import archive, templates
from .config import GeneratorConfig
from .errors import AndroidBuildError, MissingFields
from .icon import decode_icon
from .models import Artifact, BuildConfig, DerivedIdentity
from .naming import DEFAULT_PACKAGE_PREFIX, derive_identity, now_ms
from .publisher import Publisher
from .storage import S3Storage, StorageClient

logger = logging.getLogger(__name__)


def build_archive(
    config: BuildConfig,
    *,
    package_prefix: str = DEFAULT_PACKAGE_PREFIX,
    escaper: templates.ValueEscaper | None = None,
    clock: Callable[[], int] = now_ms,
) -> tuple[DerivedIdentity, bytes]:
    """Validate, render and pack a project without touching storage."""
    missing = config.missing_fields()
    if missing:
        raise MissingFields(missing)

    identity = derive_identity(config.app_name or "", created_ms=clock(), prefix=package_prefix)
    icon_bytes = decode_icon(config.icon_data or "")
    project = templates.render(config, identity, icon_bytes, escaper=escaper)
    data = archive.assemble(project)
    logger.info("Archive generated for %s, size: %d", identity.build_id, len(data))
    return identity, data


class AndroidAppGenerator:
    """Turns a BuildConfig into a published WebView project archive.

    Steps run strictly in order and the first failure stops the run. Nothing
    external is touched before the publish step.
    """

    def __init__(
        self,
        publisher: Publisher,
        *,
        package_prefix: str = DEFAULT_PACKAGE_PREFIX,
        escaper: templates.ValueEscaper | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.publisher = publisher
        self.package_prefix = package_prefix
        self.escaper = escaper or templates.get_escaper("literal")
        self.clock = clock

    def build_archive(self, config: BuildConfig) -> tuple[DerivedIdentity, bytes]:
        return build_archive(config, package_prefix=self.package_prefix, escaper=self.escaper, clock=self.clock)

    def run(self, config: BuildConfig) -> Artifact:
        logger.info("Starting Android app generation")
        identity, data = self.build_archive(config)
        url = self.publisher.publish(data, identity.build_id)
        return Artifact.ok(download_url=url, app_name=config.app_name or "", package_name=identity.package_name)

    def generate(self, config: BuildConfig) -> Artifact:
        try:
            return self.run(config)
        except AndroidBuildError as e:
            logger.error("Android app generation failed (%s): %s", e.kind, e.message)
            return Artifact.failure(e)


def build_generator(
    cfg: GeneratorConfig,
    *,
    storage: StorageClient | None = None,
    sleep: Callable[[float], None] | None = None,
) -> AndroidAppGenerator:
    storage = storage or S3Storage(
        region=cfg.region,
        endpoint_url=cfg.endpoint_url,
        public_base_url=cfg.public_base_url,
    )
    publisher_kwargs = {} if sleep is None else {"sleep": sleep}
    publisher = Publisher(
        storage,
        bucket=cfg.bucket,
        prefix=cfg.prefix,
        max_attempts=cfg.upload_max_attempts,
        retry_delay_s=cfg.upload_retry_delay_s,
        **publisher_kwargs,
    )
    return AndroidAppGenerator(
        publisher,
        package_prefix=cfg.package_prefix,
        escaper=templates.get_escaper(cfg.escaping),
    )
