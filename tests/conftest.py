"""
Pytest fixtures for aseupdater tests.

Network access is never real: tests patch ``urlopen`` in the module under
test with a FakeResponse, or hand the resolver a stub fetcher.
"""

import http.client
import io
import json

import pytest

from aseupdater.core.errors import NetworkError
from aseupdater.core.models import AssetDescriptor, PackageDescriptor, ReleaseInfo


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP fakes
# ═══════════════════════════════════════════════════════════════════════════════


class FakeResponse(io.BytesIO):
    """Minimal stand-in for the object urlopen() returns."""

    def __init__(self, body: bytes, headers: dict | None = None):
        super().__init__(body)
        self.headers = headers or {}


class TruncatedResponse(FakeResponse):
    """Serves ``body`` once, then drops the connection mid-transfer."""

    def __init__(self, body: bytes, expected: int, headers: dict | None = None):
        super().__init__(body, headers)
        self.expected = expected
        self._served = False

    def read(self, size=-1):
        missing = self.expected - len(self.getvalue())
        if size is None or size < 0:
            raise http.client.IncompleteRead(self.getvalue(), missing)
        if not self._served:
            self._served = True
            return super().read(size)
        raise http.client.IncompleteRead(b"", missing)


def release_json(tag: str = "v1.1.0", assets: list | None = None) -> dict:
    """A GitHub 'latest release' document."""
    if assets is None:
        assets = [{
            "name": "my-extension.aseprite-extension",
            "browser_download_url": "https://example.com/my-extension.aseprite-extension",
        }]
    return {"tag_name": tag, "name": tag, "assets": assets}


class StubFetcher:
    """ReleaseFetcher replacement keyed by endpoint."""

    def __init__(self, releases: dict):
        self.releases = releases
        self.calls = []

    def fetch(self, endpoint):
        self.calls.append(endpoint)
        result = self.releases[endpoint]
        if isinstance(result, Exception):
            raise result
        return result


# ═══════════════════════════════════════════════════════════════════════════════
# Extension fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def extensions_dir(tmp_path):
    path = tmp_path / "extensions"
    path.mkdir()
    return path


@pytest.fixture
def make_extension(extensions_dir):
    """Create an extension directory with the given package.json content.

    ``package`` may be a dict (dumped as JSON), a raw string, or None for a
    directory without package.json.
    """
    def _make(dirname: str, package=None):
        ext = extensions_dir / dirname
        ext.mkdir()
        if isinstance(package, dict):
            (ext / "package.json").write_text(json.dumps(package), encoding="utf-8")
        elif isinstance(package, str):
            (ext / "package.json").write_text(package, encoding="utf-8")
        return ext

    return _make


def opted_in_package(name="my-extension", display_name="My Extension",
                     version="1.0.0", url=None) -> dict:
    return {
        "name": name,
        "displayName": display_name,
        "version": version,
        "asepriteExtensionUpdater": {
            "updateUrl": url or f"https://api.github.com/repos/me/{name}/releases/latest",
        },
    }


@pytest.fixture
def descriptor():
    return PackageDescriptor(
        identifier="my-extension",
        display_name="My Extension",
        installed_version="1.0.0",
        update_endpoint="https://api.github.com/repos/me/my-extension/releases/latest",
    )


@pytest.fixture
def bundle_release():
    def _release(tag="v1.1.0", name="my-extension.aseprite-extension"):
        return ReleaseInfo(tag_label=tag, assets=(
            AssetDescriptor("source.zip", "https://example.com/source.zip"),
            AssetDescriptor(name, f"https://example.com/{name}"),
        ))
    return _release


@pytest.fixture
def network_down():
    return NetworkError("https://example.com", "connection refused")


@pytest.fixture
def settings(tmp_path, extensions_dir):
    from aseupdater.config.settings import UpdaterSettings
    return UpdaterSettings(
        extensions_dir=str(extensions_dir),
        download_dir=str(tmp_path / "downloads"),
        data_dir=str(tmp_path / "data"),
    )


