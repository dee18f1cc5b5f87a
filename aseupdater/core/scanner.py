"""Installed extension discovery.

An extension takes part in update checks only if its package.json carries
an ``asepriteExtensionUpdater`` object with an ``updateUrl`` string, e.g.::

    {
      "name": "my-extension",
      "displayName": "My Extension",
      "version": "1.2.0",
      "asepriteExtensionUpdater": {
        "updateUrl": "https://api.github.com/repos/me/my-extension/releases/latest"
      }
    }
"""

import json
import logging
import os

from aseupdater.branding import AppBranding
from aseupdater.core.models import PackageDescriptor

logger = logging.getLogger(__name__)

PACKAGE_FILE = 'package.json'


class ExtensionScanner:
    """Finds opted-in extensions under an extensions directory. Read-only."""

    def __init__(self, root: str):
        self.root = root

    def scan(self) -> dict[str, PackageDescriptor]:
        """Return opted-in extensions keyed by identifier."""
        if not os.path.isdir(self.root):
            logger.info("Extensions directory not found: %s", self.root)
            return {}

        try:
            entries = sorted(os.listdir(self.root))
        except OSError as e:
            logger.warning("Cannot read extensions directory %s: %s", self.root, e)
            return {}

        found: dict[str, PackageDescriptor] = {}
        names: dict[str, str] = {}  # display name -> identifier

        for entry in entries:
            ext_dir = os.path.join(self.root, entry)
            if not os.path.isdir(ext_dir):
                continue

            desc = self.read_descriptor(ext_dir)
            if desc is None:
                continue

            if desc.identifier in found:
                logger.warning("Duplicate extension id %r in %s, replacing %s",
                               desc.identifier, ext_dir,
                               found[desc.identifier].path)
            other = names.get(desc.display_name)
            if other is not None and other != desc.identifier:
                logger.warning("Extensions %r and %r share the display name %r",
                               other, desc.identifier, desc.display_name)

            found[desc.identifier] = desc
            names[desc.display_name] = desc.identifier

        logger.info("Found %d extension(s) with update info in %s",
                    len(found), self.root)
        return found

    @staticmethod
    def read_descriptor(ext_dir: str) -> PackageDescriptor | None:
        """Build a descriptor from ``ext_dir``/package.json, or None to skip."""
        path = os.path.join(ext_dir, PACKAGE_FILE)
        try:
            with open(path, 'r', encoding='utf-8-sig') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping %s: %s", ext_dir, e)
            return None

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Skipping %s: invalid JSON (%s)", path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Skipping %s: not a JSON object", path)
            return None

        opt_in = data.get(AppBranding.OPT_IN_KEY)
        if not isinstance(opt_in, dict):
            return None
        endpoint = opt_in.get('updateUrl')
        if not isinstance(endpoint, str) or not endpoint.strip():
            return None

        identifier = data.get('name') or os.path.basename(os.path.normpath(ext_dir))
        version = data.get('version')
        return PackageDescriptor(
            identifier=str(identifier),
            display_name=str(data.get('displayName') or identifier),
            installed_version='' if version is None else str(version),
            update_endpoint=endpoint.strip(),
            path=ext_dir,
        )


def scan_extensions(root: str) -> dict[str, PackageDescriptor]:
    return ExtensionScanner(root).scan()
