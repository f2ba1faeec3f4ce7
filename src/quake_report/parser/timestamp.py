"""
Timestamp scanning for Quake 3 server log lines.

Every line of a games log starts with a ``MMM:SS`` timestamp, usually
right-aligned with leading spaces. After a server crash the log file can be
overwritten mid-line, leaving two timestamps on the same line
(e.g. ``26  0:00 ----``), so the scanner accepts a run of time tokens.
"""

import re
from typing import Optional

# One time token: optional leading spaces, then digits and colons.
TIME_TOKEN_PATTERN = re.compile(r' *[0-9:]+')
TRAILING_SPACES_PATTERN = re.compile(r' *')


def scan_timestamp(text: str, pos: int = 0) -> Optional[int]:
    """
    Consume one or more time tokens starting at ``pos``.

    Args:
        text: The log buffer
        pos: Offset to start scanning from

    Returns:
        Offset just past the timestamp and any trailing spaces, or None if no
        time token starts at ``pos``.
    """
    match = TIME_TOKEN_PATTERN.match(text, pos)
    if not match:
        return None

    end = match.end()
    while True:
        match = TIME_TOKEN_PATTERN.match(text, end)
        if not match:
            break
        end = match.end()

    return TRAILING_SPACES_PATTERN.match(text, end).end()
