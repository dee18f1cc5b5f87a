"""Updates dialog — lists available extension updates with download actions.

The dialog only presents a ResolutionReport. Refreshing after an install
is a fresh call to check_for_updates(), driven by run_update_check().
"""

import logging

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtGui import QCursor, QDesktopServices
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QCheckBox,
    QFrame, QMessageBox, QApplication,
)

from aseupdater.config.settings import UpdaterSettings
from aseupdater.core.errors import UpdaterError
from aseupdater.core.installer import download_and_install
from aseupdater.core.models import ResolutionReport, UpdateCandidate
from aseupdater.core.resolver import check_for_updates

logger = logging.getLogger(__name__)

# Dialog result asking the caller to run another check
REFRESH_REQUESTED = 2

STARTUP_CHECK_LABEL = "Check for updates at startup"


class UpdatesDialog(QDialog):
    """One row per update: label, Download, Download + Install."""

    def __init__(self, report: ResolutionReport, settings: UpdaterSettings,
                 parent=None):
        super().__init__(parent)
        self.setWindowTitle("Updates Available")
        self.setMinimumWidth(420)
        self._settings = settings

        layout = QVBoxLayout(self)

        for candidate in report.updates:
            layout.addWidget(self._create_row(candidate))

        self._startup_check = QCheckBox(STARTUP_CHECK_LABEL)
        self._startup_check.setChecked(settings.check_at_startup)
        self._startup_check.toggled.connect(self._set_check_at_startup)
        layout.addWidget(self._startup_check)

        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        layout.addWidget(cancel_btn)

    def _create_row(self, candidate: UpdateCandidate) -> QFrame:
        row = QFrame()
        row.setFrameShape(QFrame.Shape.StyledPanel)
        col = QVBoxLayout(row)

        col.addWidget(QLabel(
            f'"{candidate.display_name}" {candidate.installed_version}'
            f' >> {candidate.remote_version}'
        ))

        buttons = QHBoxLayout()
        dl_btn = QPushButton("Download")
        dl_btn.clicked.connect(lambda: self._download(candidate))
        buttons.addWidget(dl_btn)

        install_btn = QPushButton("Download + Install")
        install_btn.setDefault(True)
        install_btn.clicked.connect(lambda: self._download_and_install(candidate))
        buttons.addWidget(install_btn)

        col.addLayout(buttons)
        return row

    def _set_check_at_startup(self, checked: bool):
        self._settings.check_at_startup = checked

    def _download(self, candidate: UpdateCandidate):
        """Let the browser fetch the bundle."""
        QDesktopServices.openUrl(QUrl(candidate.download_url))

    def _download_and_install(self, candidate: UpdateCandidate):
        try:
            download_and_install(candidate, self._settings)
        except UpdaterError as e:
            logger.error("Install of %s failed: %s", candidate.display_name, e)
            QMessageBox.warning(self, "Extension Updater Error", str(e))
            return
        self.done(REFRESH_REQUESTED)


def show_failures(parent, report: ResolutionReport):
    """One warning per extension that could not be checked."""
    for failure in report.failures:
        QMessageBox.warning(parent, "Extension Updater Error", failure.message)


def show_up_to_date(parent, settings: UpdaterSettings):
    """Up-to-date notice, with the startup preference so it stays reachable."""
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Icon.Information)
    box.setWindowTitle("No Updates Available")
    box.setText("All qualified extensions are up to date!")
    startup_check = QCheckBox(STARTUP_CHECK_LABEL)
    startup_check.setChecked(settings.check_at_startup)
    box.setCheckBox(startup_check)
    box.exec()
    settings.check_at_startup = startup_check.isChecked()


def run_update_check(settings: UpdaterSettings, parent=None, quiet: bool = False):
    """Check, report, and offer updates until the user stops installing.

    ``quiet`` hides the "up to date" message, for checks run at startup.
    """
    while True:
        # The pass blocks this thread until every extension has been checked
        QApplication.setOverrideCursor(QCursor(Qt.CursorShape.WaitCursor))
        try:
            report = check_for_updates(settings)
        except UpdaterError as e:
            logger.error("Update check failed: %s", e)
            QMessageBox.warning(parent, "Extension Updater Error", str(e))
            return
        finally:
            QApplication.restoreOverrideCursor()

        show_failures(parent, report)

        if not report.has_updates:
            if not quiet and not report.has_errors:
                show_up_to_date(parent, settings)
            return

        dlg = UpdatesDialog(report, settings, parent)
        if dlg.exec() != REFRESH_REQUESTED:
            return
