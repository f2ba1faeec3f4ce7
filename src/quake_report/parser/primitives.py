"""
Low-level matching helpers shared by the log grammar rules.

Each helper works on a ``(text, pos)`` pair and returns the new offset (and
the matched slice where useful) or None. None of them consume anything on
failure.
"""

from typing import Optional, Tuple


def tag(text: str, pos: int, literal: str) -> Optional[int]:
    """Match ``literal`` exactly at ``pos``."""
    if text.startswith(literal, pos):
        return pos + len(literal)
    return None


def take_until(text: str, pos: int, delimiter: str,
               end: Optional[int] = None) -> Optional[Tuple[int, str]]:
    """
    Take everything from ``pos`` up to, not including, the next ``delimiter``.

    Args:
        text: The log buffer
        pos: Offset to start from
        delimiter: Text to stop at
        end: If given, the delimiter must lie entirely before this offset

    Returns:
        Tuple of (offset of the delimiter, taken text), or None if the
        delimiter does not occur.
    """
    if end is None:
        found = text.find(delimiter, pos)
    else:
        found = text.find(delimiter, pos, end)
    if found < 0:
        return None
    return found, text[pos:found]


def skip_past(text: str, pos: int, delimiter: str,
              end: Optional[int] = None) -> Optional[int]:
    """Skip to the next ``delimiter`` and consume it."""
    taken = take_until(text, pos, delimiter, end)
    if taken is None:
        return None
    return taken[0] + len(delimiter)
