"""Exception taxonomy for update checks and installs.

Skipped extension directories and releases without a bundle are not
exceptions: the scanner logs and moves on, and the resolver records a
PackageFailure for the missing bundle.
"""


class UpdaterError(Exception):
    """Base class for all updater failures. ``str(err)`` is user-facing."""


class NetworkError(UpdaterError):
    """The release endpoint could not be reached or answered garbage bytes."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Could not fetch release data from {endpoint}: {reason}")


class ReleaseParseError(UpdaterError):
    """The release endpoint answered, but not with a usable release document."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Invalid release data from {endpoint}: {reason}")


class VersionParseError(UpdaterError, ValueError):
    """A version string is not a major.minor.patch triplet."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Cannot parse version: {version!r}")


class InstallError(UpdaterError):
    """Downloading or launching an installable bundle failed."""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Install failed for {target}: {reason}")


class ResolutionInProgressError(UpdaterError):
    """A resolution pass was started while another one is still running."""

    def __init__(self):
        super().__init__("An update check is already running")
