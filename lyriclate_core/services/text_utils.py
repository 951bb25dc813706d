"""Text shaping applied between transcription and translation."""

from __future__ import annotations

import re

# Terminal punctuation plus any trailing whitespace, including existing breaks.
_CLAUSE_END = re.compile(r"([.?!])\s*")


def segment_lyrics(text: str) -> str:
    """Break *text* into lyric lines after every ``.``, ``?`` and ``!``.

    Each punctuation mark keeps its place and the whitespace after it is
    replaced by exactly one newline, so ``"Hello world. How are you?"``
    becomes ``"Hello world.\\nHow are you?\\n"``. This is a line-shaping
    heuristic, not a sentence splitter: abbreviations (``"Mr. Blue"``),
    decimals (``"3.14"``) and quoted punctuation are broken like any other
    match, and consecutive marks each get their own line (``"Wait?!"``
    becomes ``"Wait?\\n!\\n"``).

    Output always has a single newline after each mark, so applying the
    transform twice gives the same text.
    """

    return _CLAUSE_END.sub(r"\1\n", text)


__all__ = ["segment_lyrics"]
