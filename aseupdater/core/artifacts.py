"""Installable bundle selection from a release's asset list."""

from collections.abc import Iterable

from aseupdater.branding import AppBranding
from aseupdater.core.models import AssetDescriptor


def is_bundle(name: str) -> bool:
    return name.lower().endswith(AppBranding.BUNDLE_EXTENSION)


def select_artifact(assets: Iterable[AssetDescriptor] | None) -> str | None:
    """Return the download URL of the first installable bundle, or None.

    Upstream order is authoritative; later matches are ignored.
    """
    for asset in assets or ():
        if is_bundle(asset.name) and asset.download_url:
            return asset.download_url
    return None
