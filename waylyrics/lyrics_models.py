from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .lrc_parser import iter_tagged_lines


@dataclass
class TrackMetadata:
    track_id: str
    track_name: str
    artist_name: str
    album_name: str
    duration_ms: int


class PlaybackStatus(Enum):
    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"


@dataclass
class PlaybackState:
    metadata: TrackMetadata
    position_ms: float
    status: PlaybackStatus


@dataclass(frozen=True)
class LyricsLine:
    start_time_ms: int
    words: str


class LyricTrack:
    """Time-sorted, read-only lyric lines of one transcript variant.

    Instances are never modified after construction; a new track is built
    whenever the playing song changes.
    """

    __slots__ = ("_lines", "_times")

    def __init__(self, lines: Tuple[LyricsLine, ...] = ()):
        # sorted() is stable, so tags of one line keep their source order
        self._lines: Tuple[LyricsLine, ...] = tuple(sorted(lines, key=lambda x: x.start_time_ms))
        self._times: List[int] = [line.start_time_ms for line in self._lines]

    @classmethod
    def from_text(cls, text: Optional[str]) -> "LyricTrack":
        """Build a track from raw LRC transcript text.

        Args:
            text: Transcript text, or None when the variant is unavailable

        Returns:
            LyricTrack: Possibly empty track; malformed lines are ignored
        """
        return cls(tuple(LyricsLine(start_time_ms=ms, words=words) for ms, words in iter_tagged_lines(text or "")))

    @classmethod
    def empty(cls) -> "LyricTrack":
        return cls()

    @property
    def lines(self) -> Tuple[LyricsLine, ...]:
        return self._lines

    def __iter__(self) -> Iterator[LyricsLine]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    def __repr__(self) -> str:
        return f"LyricTrack({len(self._lines)} lines)"

    def is_empty(self) -> bool:
        return not self._lines

    def _count_before(self, position_ms: float) -> int:
        # number of lines whose start is strictly before position_ms
        return bisect.bisect_left(self._times, position_ms)

    def get_lyric(self, position_ms: float) -> Optional[str]:
        """Return the last line started strictly before position_ms, or None."""
        idx = self._count_before(position_ms)
        if idx == 0:
            return None
        return self._lines[idx - 1].words

    def get_no_space_lyric(self, position_ms: float) -> Optional[str]:
        """Like get_lyric, but blank (whitespace-only) lines never become active."""
        idx = self._count_before(position_ms)
        while idx > 0:
            idx -= 1
            words = self._lines[idx].words
            if words.strip():
                return words
        return None


@dataclass(frozen=True)
class LyricsBundle:
    """Original, translated and phonetic lyrics of one song."""

    original: LyricTrack = field(default_factory=LyricTrack)
    translated: LyricTrack = field(default_factory=LyricTrack)
    phonetic: LyricTrack = field(default_factory=LyricTrack)
    source: str = "Unknown"

    @classmethod
    def from_texts(
        cls,
        original: Optional[str],
        translated: Optional[str] = None,
        phonetic: Optional[str] = None,
        source: str = "Unknown",
    ) -> "LyricsBundle":
        return cls(
            original=LyricTrack.from_text(original),
            translated=LyricTrack.from_text(translated),
            phonetic=LyricTrack.from_text(phonetic),
            source=source,
        )

    def is_empty(self) -> bool:
        return self.original.is_empty()
