import json

import pytest

from waylyrics.lyrics_models import LyricsBundle, PlaybackStatus
from waylyrics.status_line import (
    DisplayOptions,
    STATUS_ICONS,
    StatusOutput,
    format_duration,
    ms_to_min_sec,
    render_default,
    render_status,
)


@pytest.fixture
def bundle(sample_lrc, translated_lrc):
    return LyricsBundle.from_texts(sample_lrc, translated_lrc, "[00:01.00]a\n[00:02.00]bee")


def test_format_duration():
    assert ms_to_min_sec(0) == "00:00"
    assert ms_to_min_sec(61_999) == "01:01"
    assert format_duration(61_500, 200_000) == "01:01/03:20"


def test_full_line(make_state, bundle):
    output = render_status(make_state(position_ms=2_500), bundle, DisplayOptions())
    icon = STATUS_ICONS[PlaybackStatus.PLAYING]
    assert output.text == f"{icon} Some Title (00:02/03:20) - B [乙]"
    assert output.tooltip == "Some Title - Some Artist"
    assert output.class_ == "lyrics"


def test_lyric_segments_omitted_before_first_line(make_state, bundle):
    output = render_status(make_state(position_ms=500), bundle, DisplayOptions(show_status=False))
    assert output.text == "Some Title (00:00/03:20)"


def test_disabled_segments(make_state, bundle):
    options = DisplayOptions(show_status=False, show_title=False, show_position=False, show_translate_lyric=False)
    output = render_status(make_state(position_ms=3_600), bundle, options)
    assert output.text == " - C"


def test_paused_icon(make_state, bundle):
    output = render_status(make_state(status=PlaybackStatus.PAUSED), bundle, DisplayOptions())
    assert output.text.startswith("▶ ")


def test_phonetic_segment(make_state, bundle):
    options = DisplayOptions(show_status=False, show_position=False, show_phonetic=True)
    output = render_status(make_state(position_ms=2_500), bundle, options)
    assert output.text == "Some Title - B [乙] {bee}"


def test_empty_bundle(make_state):
    output = render_status(make_state(position_ms=2_500), LyricsBundle(), DisplayOptions(show_status=False))
    assert output.text == "Some Title (00:02/03:20)"


def test_to_json_keeps_unicode():
    data = StatusOutput(text="歌词", tooltip="t").to_json()
    assert "歌词" in data
    assert json.loads(data) == {"class": "lyrics", "text": "歌词", "tooltip": "t"}


def test_render_default():
    output = render_default("could not get lyric", default_text="Idle")
    assert output.to_dict() == {"class": "lyrics", "text": "Idle", "tooltip": "could not get lyric"}
