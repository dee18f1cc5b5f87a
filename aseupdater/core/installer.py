"""Bundle download and hand-off to Aseprite.

Opening a .aseprite-extension file with the OS makes Aseprite install it,
so "install" here means: download to a known path, then open that path.
"""

import logging
import os
import subprocess
import sys
from http.client import HTTPException
from urllib.error import URLError
from urllib.request import Request, urlopen

from aseupdater.branding import AppBranding
from aseupdater.core.errors import InstallError
from aseupdater.core.models import UpdateCandidate

logger = logging.getLogger(__name__)

# Buffer size for streaming downloads (80 KB)
DOWNLOAD_BUFFER = 81920


def bundle_path(candidate: UpdateCandidate, download_dir: str) -> str:
    return os.path.join(download_dir,
                        candidate.package_identifier + AppBranding.BUNDLE_EXTENSION)


def download_bundle(candidate: UpdateCandidate, download_dir: str,
                    timeout: float = 120, progress_callback=None) -> str:
    """Download the candidate's bundle into ``download_dir``. Returns its path."""
    os.makedirs(download_dir, exist_ok=True)
    path = bundle_path(candidate, download_dir)

    # A previous download of the same extension is stale by definition
    if os.path.exists(path):
        os.remove(path)

    req = Request(candidate.download_url, headers={
        'User-Agent': AppBranding.user_agent(),
    })

    logger.info("Downloading %s %s from %s", candidate.display_name,
                candidate.remote_version, candidate.download_url)
    try:
        with urlopen(req, timeout=timeout) as resp:
            total = int(resp.headers.get('Content-Length', 0) or 0)
            downloaded = 0
            with open(path, 'wb') as f:
                while True:
                    chunk = resp.read(DOWNLOAD_BUFFER)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)
                    if total > 0 and progress_callback:
                        progress_callback(min(int(downloaded * 100 / total), 100))
    except (URLError, HTTPException, OSError, ValueError) as e:
        if os.path.exists(path):
            os.remove(path)
        raise InstallError(candidate.download_url, f"download failed: {e}") from e

    logger.info("Saved %s (%d bytes)", path, downloaded)
    return path


def launch_bundle(path: str):
    """Open the bundle with its associated application (Aseprite)."""
    try:
        if sys.platform == 'win32':
            os.startfile(path)  # noqa: S606 (Windows only)
        elif sys.platform == 'darwin':
            subprocess.Popen(['open', path])
        else:
            subprocess.Popen(['xdg-open', path])
    except OSError as e:
        raise InstallError(path, f"could not open bundle: {e}") from e
    logger.info("Handed %s to the host for installation", path)


def download_and_install(candidate: UpdateCandidate, settings,
                         progress_callback=None) -> str:
    """Download the candidate's bundle and open it. Returns the bundle path."""
    path = download_bundle(candidate, settings.download_dir,
                           progress_callback=progress_callback)
    launch_bundle(path)
    return path
