"""Split oversized article bodies into bounded segments."""

from __future__ import annotations

from typing import List

__all__ = ["MAX_CONTENT_LENGTH", "split_content"]

# About 6000-7000 tokens at a conservative 3 characters per token.
MAX_CONTENT_LENGTH = 20000


def split_content(text: str, max_length: int = MAX_CONTENT_LENGTH) -> List[str]:
    """Return consecutive, non-overlapping slices of ``text`` of at most ``max_length``.

    Each window is cut after the last ``.`` or newline it contains, provided that
    point lies beyond the middle of the window; otherwise the window is cut hard
    at ``max_length``. Joining the result always reproduces ``text``.
    """

    if max_length <= 0:
        raise ValueError("max_length must be positive")

    if len(text) <= max_length:
        return [text]

    chunks: List[str] = []
    offset = 0
    while offset < len(text):
        window = text[offset : offset + max_length]
        split_point = max(window.rfind("."), window.rfind("\n"))

        if split_point > max_length * 0.5:
            chunks.append(window[: split_point + 1])
            offset += split_point + 1
        else:
            chunks.append(window)
            offset += max_length

    return chunks
