"""Updater settings — persistence via JSON."""

import json
import logging
import os
import sys
from dataclasses import dataclass, asdict

logger = logging.getLogger(__name__)


def _default_aseprite_config_dir() -> str:
    home = os.path.expanduser('~')
    if sys.platform == 'win32':
        return os.path.join(os.environ.get('APPDATA', home), 'Aseprite')
    if sys.platform == 'darwin':
        return os.path.join(home, 'Library', 'Application Support', 'Aseprite')
    return os.path.join(os.environ.get('XDG_CONFIG_HOME', os.path.join(home, '.config')),
                        'aseprite')


DEFAULT_DATA_DIR = os.path.join(_default_aseprite_config_dir(), 'extension-updater')


@dataclass
class UpdaterSettings:
    """Persistent updater settings, owned by the host process."""
    check_at_startup: bool = False

    # Paths
    extensions_dir: str = ""
    download_dir: str = ""              # Where bundles land before install
    data_dir: str = ""

    # Network
    request_timeout: float = 30.0       # Seconds per release request
    abort_on_fetch_error: bool = False  # True: first fetch failure ends the pass

    def __post_init__(self):
        if not self.extensions_dir:
            self.extensions_dir = os.path.join(_default_aseprite_config_dir(), 'extensions')
        if not self.download_dir:
            self.download_dir = os.path.join(os.path.expanduser('~'), 'Documents')
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR

    @staticmethod
    def load(path: str | None = None) -> 'UpdaterSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'settings.json')

        if not os.path.isfile(path):
            logger.info("No settings file, using defaults")
            return UpdaterSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = UpdaterSettings(**{k: v for k, v in data.items()
                                          if k in UpdaterSettings.__dataclass_fields__})
            logger.info("Loaded settings from %s", path)
            return settings
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load settings: %s", e)
            return UpdaterSettings()

    def save(self, path: str | None = None):
        """Save settings to JSON."""
        if path is None:
            path = os.path.join(self.data_dir, 'settings.json')

        os.makedirs(os.path.dirname(path), exist_ok=True)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self), f, indent=2)
            logger.info("Saved settings to %s", path)
        except OSError as e:
            logger.warning("Failed to save settings: %s", e)

    def ensure_dirs(self):
        """Create data directories if they don't exist."""
        os.makedirs(self.data_dir, exist_ok=True)
        os.makedirs(os.path.join(self.data_dir, 'logs'), exist_ok=True)
