"""Deterministic content fingerprint for extracted segments."""

import hashlib
from typing import Iterable

# Changing the separator changes every digest
SEGMENT_SEPARATOR = "\n\n\n\n"


def digest(segments: Iterable[str]) -> str:
    """
    Compute the content digest of an ordered sequence of segments.

    The digest is the MD5 hex digest of the UTF-8 encoded segments joined
    by ``SEGMENT_SEPARATOR``. It is stable across processes and platforms
    and is used downstream as a change-detection and deduplication key.

    Args:
        segments: Ordered text segments

    Returns:
        32-character lowercase hex digest
    """
    joined = SEGMENT_SEPARATOR.join(segments)
    return hashlib.md5(joined.encode("utf-8")).hexdigest()
