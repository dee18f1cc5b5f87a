"""Update resolution — fetch, pick a bundle, compare versions, per extension.

Architecture:
  UpdateResolver — synchronous pass over every opted-in extension
  check_for_updates — scan + resolve driven by UpdaterSettings
"""

import logging
from collections.abc import Iterable, Mapping

from aseupdater.core.artifacts import select_artifact
from aseupdater.core.errors import (
    NetworkError, ReleaseParseError, ResolutionInProgressError, VersionParseError,
)
from aseupdater.core.fetcher import ReleaseFetcher
from aseupdater.core.models import (
    PackageDescriptor, PackageFailure, ResolutionReport, UpdateCandidate,
)
from aseupdater.core.scanner import scan_extensions
from aseupdater.core.version import is_update_available, sanitize_version

logger = logging.getLogger(__name__)


class UpdateResolver:
    """Runs one resolution pass and returns plain result data.

    Fetch failures are recorded per extension unless ``abort_on_fetch_error``
    is set, in which case the first one propagates and ends the pass.
    Missing bundles and unparseable versions are always recorded.
    """

    def __init__(self, fetcher: ReleaseFetcher | None = None,
                 abort_on_fetch_error: bool = False):
        self.fetcher = fetcher or ReleaseFetcher()
        self.abort_on_fetch_error = abort_on_fetch_error
        self._running = False

    @property
    def in_progress(self) -> bool:
        return self._running

    def resolve(self, descriptors: Mapping[str, PackageDescriptor]
                | Iterable[PackageDescriptor]) -> ResolutionReport:
        """Check every descriptor and return the full report in one call."""
        if self._running:
            raise ResolutionInProgressError()

        if isinstance(descriptors, Mapping):
            descriptors = descriptors.values()

        self._running = True
        report = ResolutionReport()
        try:
            for desc in descriptors:
                self._resolve_one(desc, report)
        finally:
            self._running = False

        logger.info("Update check: %d update(s), %d up to date, %d failure(s)",
                    len(report.updates), len(report.up_to_date),
                    len(report.failures))
        return report

    def _resolve_one(self, desc: PackageDescriptor, report: ResolutionReport):
        # ── Fetch ────────────────────────────────────────────────────
        try:
            release = self.fetcher.fetch(desc.update_endpoint)
        except (NetworkError, ReleaseParseError) as e:
            if self.abort_on_fetch_error:
                raise
            logger.warning("Release fetch failed for %s: %s", desc.display_name, e)
            report.fetch_failures.append(self._failure(desc, str(e)))
            return

        # ── Bundle ───────────────────────────────────────────────────
        download_url = select_artifact(release.assets)
        if download_url is None:
            logger.warning("No installable bundle in release %s of %s",
                           release.tag_label, desc.display_name)
            report.asset_failures.append(self._failure(
                desc,
                "No aseprite-extension bundle found in the latest release. "
                "Contact the extension's owner.",
            ))
            return

        # ── Compare ──────────────────────────────────────────────────
        try:
            newer = is_update_available(desc.installed_version, release.tag_label)
        except VersionParseError as e:
            logger.warning("Version comparison failed for %s: %s",
                           desc.display_name, e)
            report.version_failures.append(self._failure(desc, str(e)))
            return

        if not newer:
            logger.debug("%s is up to date (%s, remote %s)", desc.display_name,
                         desc.installed_version, release.tag_label)
            report.up_to_date.append(desc.identifier)
            return

        logger.info("Update available for %s: %s -> %s", desc.display_name,
                    desc.installed_version, release.tag_label)
        report.updates.append(UpdateCandidate(
            package_identifier=desc.identifier,
            display_name=desc.display_name,
            installed_version=desc.installed_version,
            remote_version=sanitize_version(release.tag_label),
            download_url=download_url,
        ))

    @staticmethod
    def _failure(desc: PackageDescriptor, reason: str) -> PackageFailure:
        return PackageFailure(
            identifier=desc.identifier,
            display_name=desc.display_name,
            reason=reason,
            endpoint=desc.update_endpoint,
        )


def check_for_updates(settings, fetcher: ReleaseFetcher | None = None) -> ResolutionReport:
    """Scan ``settings.extensions_dir`` and resolve every opted-in extension."""
    if fetcher is None:
        fetcher = ReleaseFetcher(timeout=settings.request_timeout)
    resolver = UpdateResolver(fetcher,
                              abort_on_fetch_error=settings.abort_on_fetch_error)
    return resolver.resolve(scan_extensions(settings.extensions_dir))
