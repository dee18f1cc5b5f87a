"""Release metadata retrieval — one blocking GET per extension."""

import json
import logging
from http.client import HTTPException
from urllib.error import URLError
from urllib.request import Request, urlopen

from aseupdater.branding import AppBranding
from aseupdater.core.errors import NetworkError, ReleaseParseError
from aseupdater.core.models import AssetDescriptor, ReleaseInfo

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class ReleaseFetcher:
    """Fetches and decodes the latest-release document of an extension.

    No retries and no caching: every call goes to the network.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str | None = None):
        self.timeout = timeout
        self.user_agent = user_agent or AppBranding.user_agent()

    def fetch(self, endpoint: str) -> ReleaseInfo:
        """GET ``endpoint`` and return its ReleaseInfo.

        Raises NetworkError when the transport fails, ReleaseParseError when
        the body is not a release document.
        """
        body = self._get(endpoint)
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ReleaseParseError(endpoint, f"not valid JSON ({e.msg})") from e
        return self.parse_release(endpoint, data)

    def _get(self, endpoint: str) -> str:
        req = Request(endpoint, headers={
            'User-Agent': self.user_agent,
            'Accept': 'application/vnd.github+json',
        })
        logger.debug("Fetching release data from %s", endpoint)
        try:
            # urlopen follows redirects and raises HTTPError on non-2xx
            with urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except (URLError, HTTPException, OSError, ValueError) as e:
            logger.warning("Failed to fetch %s: %s", endpoint, e)
            raise NetworkError(endpoint, str(e)) from e

        try:
            return raw.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise NetworkError(endpoint, "response is not UTF-8 text") from e

    @staticmethod
    def parse_release(endpoint: str, data) -> ReleaseInfo:
        """Build a ReleaseInfo from a decoded GitHub release object."""
        if not isinstance(data, dict):
            raise ReleaseParseError(endpoint, "expected a JSON object")

        tag = data.get('tag_name')
        if not isinstance(tag, str) or not tag:
            raise ReleaseParseError(endpoint, "missing 'tag_name'")

        assets = []
        for entry in data.get('assets') or []:
            if not isinstance(entry, dict):
                continue
            name = entry.get('name')
            url = entry.get('browser_download_url') or entry.get('downloadUrl')
            if isinstance(name, str) and isinstance(url, str):
                assets.append(AssetDescriptor(name=name, download_url=url))

        return ReleaseInfo(tag_label=tag, assets=tuple(assets))
