"""Content fingerprints for extracted functions and the markers that carry them.

A fingerprint is the first 12 hex characters of a SHA-256 digest, short enough
to read in a comment body. At 48 bits collisions are possible but negligible
for the number of functions in one changeset. The length is part of the marker
format already posted to existing reviews, so it must not change.
"""

import hashlib
import re

from ainspector.models import ExtractedFunction

FINGERPRINT_LENGTH = 12
MARKER_PREFIX = "<!-- ainspector:fn:"
MARKER_SUFFIX = " -->"

_FIELD_SEPARATOR = "\x1f"
_MARKER_RE = re.compile(re.escape(MARKER_PREFIX) + r"([a-f0-9]{12})" + re.escape(MARKER_SUFFIX))


def fingerprint(file_path: str, name: str, content: str, diff: str) -> str:
    data = _FIELD_SEPARATOR.join((file_path, name, content, diff))
    return hashlib.sha256(data.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def function_fingerprint(fn: ExtractedFunction) -> str:
    return fingerprint(fn.file_path, fn.name, fn.content, fn.diff)


def format_marker(value: str) -> str:
    """Wrap a fingerprint in an HTML comment that markdown renderers hide."""
    return f"{MARKER_PREFIX}{value}{MARKER_SUFFIX}"


def extract_marker(text: str) -> str | None:
    """Return the fingerprint of the first well-formed marker in ``text``, if any."""
    match = _MARKER_RE.search(text)
    if match is None:
        return None
    return match.group(1)
