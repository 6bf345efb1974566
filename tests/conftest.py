"""Test configuration and fixtures.

Provides reusable fixtures for:
- LRC transcripts (original / translated / blank pacing lines)
- NetEase API payloads
- TrackMetadata and PlaybackState objects
- Fake player and lyrics service doubles
"""

from unittest.mock import Mock

import pytest

from waylyrics.lyrics_models import (
    LyricsBundle,
    PlaybackState,
    PlaybackStatus,
    TrackMetadata,
)
from waylyrics.lyrics_service import LyricsFound
from waylyrics.player_client import PlaybackFound


# =============================================================================
# Transcripts
# =============================================================================


@pytest.fixture
def sample_lrc():
    return "\n".join(
        [
            "[ar:Some Artist]",
            "[ti:Some Title]",
            "[00:01.000]A",
            "[00:02.000]B",
            "[00:03.500]C",
        ]
    )


@pytest.fixture
def translated_lrc():
    return "[00:01.000]甲\n[00:02.000]乙\n[00:03.500]丙\n"


@pytest.fixture
def netease_payload(sample_lrc, translated_lrc):
    return {
        "lrc": {"version": 7, "lyric": sample_lrc},
        "tlyric": {"version": 2, "lyric": translated_lrc},
        "klyric": {"version": 0, "lyric": ""},
        "code": 200,
    }


# =============================================================================
# Player state
# =============================================================================


@pytest.fixture
def track_metadata():
    return TrackMetadata(
        track_id="1234567",
        track_name="Some Title",
        artist_name="Some Artist",
        album_name="Some Album",
        duration_ms=200_000,
    )


@pytest.fixture
def make_state(track_metadata):
    def _make(position_ms=1500.0, status=PlaybackStatus.PLAYING, metadata=None):
        return PlaybackState(
            metadata=metadata or track_metadata,
            position_ms=position_ms,
            status=status,
        )

    return _make


@pytest.fixture
def fake_player(make_state):
    player = Mock()
    player.get_playback.return_value = PlaybackFound(make_state())
    return player


@pytest.fixture
def fake_service(sample_lrc, translated_lrc):
    service = Mock()
    service.get_lyrics.return_value = LyricsFound(
        LyricsBundle.from_texts(sample_lrc, translated_lrc, source="NetEase")
    )
    return service
