"""
Scanned payload parsing
Turns raw QR text into a badge code or accepts it as a ticket URL.
"""

import re
from urllib.parse import urlsplit

BADGE_SEGMENT = "badge"
DEFAULT_TICKET_DOMAIN_MARKER = "lu.ma"
BADGE_PATH_PATTERN = re.compile(r"/badge/([^/?\s]+)")


def extract_badge_code(raw):
    """
    Return the id from a badge QR payload such as https://host/badge/<id>.

    Full URLs are split into path segments and the segment following
    "badge" is used. Anything else (partial paths, malformed URLs) falls
    back to matching /badge/<token>. Returns None if neither works.
    """
    raw = raw.strip() if raw else ""
    if not raw:
        return None

    try:
        parts = urlsplit(raw)
    except ValueError:
        parts = None

    if parts is not None and parts.scheme and parts.netloc:
        segments = [s for s in parts.path.split("/") if s]
        if BADGE_SEGMENT in segments:
            idx = segments.index(BADGE_SEGMENT)
            if idx + 1 < len(segments) and not any(c.isspace() for c in segments[idx + 1]):
                return segments[idx + 1]

    match = BADGE_PATH_PATTERN.search(raw)
    if match:
        return match.group(1)

    return None


def is_ticket_url(raw, marker=DEFAULT_TICKET_DOMAIN_MARKER):
    # Substring check only; rejects obviously wrong scans such as another badge.
    if not raw or not marker:
        return False
    return marker.lower() in raw.lower()
