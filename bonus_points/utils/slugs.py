"""
Slug helpers for the bonus catalog.

    normalize_slug('Free Coffee Mug!')  -> 'free-coffee-mug'
    punched_slug('free-coffee-mug', 1767225600) -> '1767225600_free-coffee-mug'
"""
import re
import time
import unicodedata

SLUG_MAX_LENGTH = 255

_SEPARATOR = '-'
_INVALID_CHARS = re.compile(r'[^a-z0-9\-_]+')
_REPEATED_SEPARATOR = re.compile(r'-{2,}')


def normalize_slug(value) -> str:
    """
    Turn arbitrary text into a lower-case, URL-safe slug.

    Non-ASCII characters are transliterated where possible and dropped
    otherwise; every other run of unsafe characters becomes a single dash.
    """
    if value is None:
        return ''
    text = unicodedata.normalize('NFKD', str(value))
    text = text.encode('ascii', 'ignore').decode('ascii').lower()
    text = _INVALID_CHARS.sub(_SEPARATOR, text)
    text = _REPEATED_SEPARATOR.sub(_SEPARATOR, text)
    return text.strip(_SEPARATOR)


def punched_slug(slug: str, timestamp: int = None) -> str:
    """Prefix a slug with a unix timestamp so the original value can be reused."""
    if timestamp is None:
        timestamp = int(time.time())
    return f"{timestamp}_{slug or ''}"[:SLUG_MAX_LENGTH]
