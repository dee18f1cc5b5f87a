"""ASE Extension Updater — entry points."""

import sys
import os
import logging

from aseupdater.branding import AppBranding
from aseupdater.config.settings import UpdaterSettings


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'aseupdater.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def _run(startup: bool) -> int:
    # Settings are loaded and saved only here, at the process boundary
    settings = UpdaterSettings.load()
    settings.ensure_dirs()

    setup_logging(settings.data_dir)
    logger = logging.getLogger(__name__)

    if startup and not settings.check_at_startup:
        logger.info("Startup check disabled")
        return 0

    from PyQt6.QtWidgets import QApplication
    from aseupdater.ui.updates_dialog import run_update_check

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(AppBranding.APP_NAME)

    logger.info("Checking %s for extension updates", settings.extensions_dir)
    run_update_check(settings, quiet=startup)

    settings.save()
    return 0


def main():
    """User-triggered check: always runs and always reports."""
    sys.exit(_run(startup=False))


def startup():
    """Startup hook: runs only when enabled, stays silent when up to date."""
    sys.exit(_run(startup=True))


if __name__ == '__main__':
    main()
