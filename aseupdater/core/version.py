"""Semantic version parsing and update decisions.

Only numeric triples are ordered. A remote release carrying a prerelease
label never counts as an update, whatever its numbers say.
"""

import re

from packaging.version import Version

from aseupdater.core.errors import VersionParseError
from aseupdater.core.models import SemVer

_SEMVER_RE = re.compile(
    r'^(\d+)\.(\d+)\.(\d+)'
    r'(?:-?([0-9A-Za-z][0-9A-Za-z.\-]*))?'
    r'(?:\+([0-9A-Za-z.\-]+))?$'
)
_LEADING_NON_DIGITS_RE = re.compile(r'^\D+')
_NOT_DISPLAYABLE_RE = re.compile(r'[^\d.]')


def strip_tag_prefix(tag: str) -> str:
    """Drop everything before the first digit: 'v1.2.3' and 'release-1.2.3' -> '1.2.3'."""
    return _LEADING_NON_DIGITS_RE.sub('', tag.strip())


def sanitize_version(tag: str) -> str:
    """Keep only digits and dots, for display next to the installed version."""
    return _NOT_DISPLAYABLE_RE.sub('', tag)


def parse_semver(text: str) -> SemVer:
    """Parse a strict major.minor.patch string.

    Prerelease text ("-beta.2", or attached like "1.0.0rc1") and "+build"
    metadata are captured separately. Raises VersionParseError when the
    numeric triplet is missing or incomplete.
    """
    if not isinstance(text, str):
        raise VersionParseError(repr(text))
    match = _SEMVER_RE.match(text.strip())
    if not match:
        raise VersionParseError(text)
    major, minor, patch, prerelease, build = match.groups()
    return SemVer(int(major), int(minor), int(patch), prerelease or '', build or '')


def _release_key(ver: SemVer) -> Version:
    # Version orders release segments lexicographically, major first
    return Version('.'.join(str(n) for n in ver.core))


def is_update_available(installed: str, remote: str) -> bool:
    """Return True if the remote tag is a newer stable release than installed.

    Raises VersionParseError if either side is not a semver triplet once
    the remote tag prefix has been stripped.
    """
    current = parse_semver(installed)
    latest = parse_semver(strip_tag_prefix(remote))
    if not latest.is_stable:
        return False
    return _release_key(latest) > _release_key(current)
