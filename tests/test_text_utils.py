from __future__ import annotations

import pytest

from lyriclate_core.services import segment_lyrics


def test_breaks_after_each_clause():
    assert segment_lyrics("Hello world. How are you?") == "Hello world.\nHow are you?\n"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Stay! Go.", "Stay!\nGo.\n"),
        ("No punctuation here", "No punctuation here"),
        ("", ""),
        ("One.   Two.\n\n  Three", "One.\nTwo.\nThree"),
        ("Wait?! Really", "Wait?\n!\nReally"),
        ("Mr. Blue sky", "Mr.\nBlue sky"),
        ("Pi is 3.14 today", "Pi is 3.\n14 today"),
        ('She said "stop." Then left', 'She said "stop.\n" Then left'),
        ("...", ".\n.\n.\n"),
    ],
)
def test_matches_literal_rule(text, expected):
    assert segment_lyrics(text) == expected


def test_only_breaks_after_terminal_punctuation():
    text = "la la, la; la: la\tla. end"
    result = segment_lyrics(text)
    assert result == "la la, la; la: la\tla.\nend"
    for index, char in enumerate(result):
        if char == "\n":
            assert result[index - 1] in ".?!"


@pytest.mark.parametrize("text", ["Hello world. How are you?", "Wait?! Really.  Yes!", "a . . b"])
def test_repeat_application_is_stable(text):
    once = segment_lyrics(text)
    assert segment_lyrics(once) == once
