"""MPRIS media player access through the playerctl command."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union
import logging
import re
import subprocess

from .exceptions import PlayerError
from .lyrics_models import PlaybackState, PlaybackStatus, TrackMetadata

# go-musicfox publishes NetEase song ids as MPD-style object paths
TRACK_ID_RE = re.compile(r"/org/mpd/Tracks/(?P<id>\d+)")

_FIELDS = (
    "mpris:trackid",
    "xesam:title",
    "xesam:artist",
    "xesam:album",
    "mpris:length",
    "position",
    "status",
)
METADATA_FORMAT = "\t".join("{{%s}}" % name for name in _FIELDS)


@dataclass(frozen=True)
class PlaybackFound:
    state: PlaybackState


@dataclass(frozen=True)
class NoActivePlayer:
    reason: str


@dataclass(frozen=True)
class MetadataUnavailable:
    reason: str


PlayerOutcome = Union[PlaybackFound, NoActivePlayer, MetadataUnavailable]


def parse_track_id(raw: str) -> str:
    """Return the NetEase song id embedded in an MPRIS track id, or the raw id."""
    m = TRACK_ID_RE.search(raw)
    if m:
        return m.group("id")
    return raw


def _parse_int(value: str) -> int:
    try:
        return int(float(value))
    except ValueError:
        return 0


class PlayerctlClient:
    """Manages one named MPRIS player via playerctl."""

    def __init__(self, player_name: str = "musicfox", timeout: float = 1.0):
        self.player_name = player_name
        self.timeout = timeout

    def _run(self, *args: str) -> str:
        cmd: List[str] = ["playerctl", f"--player={self.player_name}", *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout, check=False)
        except FileNotFoundError as e:
            raise PlayerError("playerctl is not installed") from e
        except subprocess.TimeoutExpired as e:
            raise PlayerError(f"playerctl timed out after {self.timeout}s") from e
        except OSError as e:
            raise PlayerError(f"could not run playerctl: {e}") from e
        if result.returncode != 0:
            message = (result.stderr or result.stdout or "").strip() or f"exit status {result.returncode}"
            raise PlayerError(message)
        return result.stdout

    def get_playback(self) -> PlayerOutcome:
        """Read track metadata, position and status in a single playerctl call.

        Returns:
            PlayerOutcome: PlaybackFound, or NoActivePlayer / MetadataUnavailable
                           with the reason
        """
        try:
            out = self._run("metadata", "--format", METADATA_FORMAT)
        except PlayerError as e:
            logging.debug(f"PlayerctlClient: {self.player_name}: {e}")
            return NoActivePlayer(f"{self.player_name}: {e}")

        values = out.rstrip("\n").split("\t")
        if len(values) != len(_FIELDS):
            return MetadataUnavailable(f"unexpected playerctl output: {out.strip()!r}")
        raw_id, title, artist, album, length, position, status = values

        if not raw_id:
            return MetadataUnavailable("could not get metadata value mpris:trackid")
        if not title:
            return MetadataUnavailable("could not get metadata value xesam:title")
        try:
            playback_status = PlaybackStatus(status)
        except ValueError:
            return MetadataUnavailable(f"unknown playback status {status!r}")

        metadata = TrackMetadata(
            track_id=parse_track_id(raw_id),
            track_name=title,
            artist_name=artist,
            album_name=album,
            duration_ms=_parse_int(length) // 1000,
        )
        # playerctl reports microseconds
        position_ms = _parse_int(position) / 1000
        return PlaybackFound(PlaybackState(metadata=metadata, position_ms=position_ms, status=playback_status))

    def play_pause(self) -> None:
        self._run("play-pause")

    def next_track(self) -> None:
        self._run("next")

    def previous_track(self) -> None:
        self._run("previous")
