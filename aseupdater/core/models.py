"""Update-resolution data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PackageDescriptor:
    """One installed extension that opted into remote update checks."""

    identifier: str         # package.json "name", or the directory name
    display_name: str
    installed_version: str
    update_endpoint: str    # asepriteExtensionUpdater.updateUrl
    path: str = ""          # Extension directory on disk


@dataclass(frozen=True)
class AssetDescriptor:
    """A downloadable file attached to a release."""

    name: str
    download_url: str


@dataclass(frozen=True)
class ReleaseInfo:
    """Latest release of one extension, as published remotely."""

    tag_label: str
    assets: tuple[AssetDescriptor, ...] = ()


@dataclass(frozen=True)
class SemVer:
    """Parsed major.minor.patch with optional prerelease and build labels."""

    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_stable(self) -> bool:
        return not self.prerelease

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


@dataclass(frozen=True)
class UpdateCandidate:
    """An extension with a newer stable release available."""

    package_identifier: str
    display_name: str
    installed_version: str
    remote_version: str     # Sanitized tag, digits and dots only
    download_url: str       # Installable bundle URL


@dataclass(frozen=True)
class PackageFailure:
    """A package whose resolution stopped short of a decision."""

    identifier: str
    display_name: str
    reason: str
    endpoint: str = ""

    @property
    def message(self) -> str:
        """User-facing text: the package name once, then the reason."""
        return f'"{self.display_name}": {self.reason}'


@dataclass
class ResolutionReport:
    """Everything one resolution pass found, in pass order."""

    updates: list[UpdateCandidate] = field(default_factory=list)
    asset_failures: list[PackageFailure] = field(default_factory=list)
    fetch_failures: list[PackageFailure] = field(default_factory=list)
    version_failures: list[PackageFailure] = field(default_factory=list)
    up_to_date: list[str] = field(default_factory=list)

    @property
    def has_updates(self) -> bool:
        return bool(self.updates)

    @property
    def has_errors(self) -> bool:
        return bool(self.asset_failures or self.fetch_failures
                     or self.version_failures)

    @property
    def failures(self) -> list[PackageFailure]:
        return self.fetch_failures + self.asset_failures + self.version_failures

    @property
    def asset_failure_names(self) -> list[str]:
        """Display names of packages whose release carries no bundle."""
        return [f.display_name for f in self.asset_failures]
