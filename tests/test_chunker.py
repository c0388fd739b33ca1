"""Tests for boundary-aware splitting in :mod:`referent.services.chunker`."""

from __future__ import annotations

import pytest

from referent.services.chunker import MAX_CONTENT_LENGTH, split_content


def test_short_text_is_returned_as_single_chunk() -> None:
    text = "A short article."

    assert split_content(text, 100) == [text]
    assert split_content(text, len(text)) == [text]


def test_splits_after_sentence_terminator() -> None:
    text = "First sentence. Second sentence. Third one here."

    assert split_content(text, 20) == ["First sentence.", " Second sentence.", " Third one here."]


def test_splits_after_newline() -> None:
    text = "abcdefghijkl\nmnopqrstuvwxyz"

    chunks = split_content(text, 20)

    assert chunks[0] == "abcdefghijkl\n"
    assert "".join(chunks) == text


def test_hard_cut_when_no_boundary_past_midpoint() -> None:
    """A boundary in the first half of the window is ignored in favour of a hard cut."""

    assert split_content("x" * 50, 20) == ["x" * 20, "x" * 20, "x" * 10]

    chunks = split_content("abc.defghijklmnopqrstuvwxyz", 20)
    assert chunks[0] == "abc.defghijklmnopqrs"


def test_chunks_reassemble_original_text() -> None:
    paragraph = "The council met on Tuesday.\nIt approved the budget. Residents objected loudly"
    samples = [paragraph * 7, "no boundaries at all " * 40, "." * 33, "\n\n" + paragraph * 3]

    for text in samples:
        for max_length in (1, 7, 25, 64, 500):
            chunks = split_content(text, max_length)
            assert "".join(chunks) == text
            assert all(0 < len(chunk) <= max_length for chunk in chunks)


def test_split_is_deterministic() -> None:
    text = "Sentence number one. " * 2000

    assert split_content(text) == split_content(text)
    assert len(text) > MAX_CONTENT_LENGTH
    assert len(split_content(text)) == 3


def test_rejects_non_positive_length() -> None:
    with pytest.raises(ValueError):
        split_content("text", 0)
