"""The polling loop: one player read, optional lyrics fetch, one status line."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional
import logging
import time

from .lyrics_models import LyricsBundle
from .lyrics_service import FetchFailed, LyricsFound, LyricsService
from .player_client import PlaybackFound, PlayerctlClient
from .status_line import DisplayOptions, StatusOutput, render_default, render_status


@dataclass
class PollSession:
    """State carried from one poll cycle to the next."""

    track_id: Optional[str] = None
    lyrics: LyricsBundle = field(default_factory=LyricsBundle)

    def needs_refresh(self, track_id: str) -> bool:
        # a failed fetch leaves track_id untouched, so the next tick retries
        return self.track_id is None or track_id != self.track_id

    def replace(self, track_id: str, lyrics: LyricsBundle) -> None:
        self.track_id = track_id
        self.lyrics = lyrics


def poll_once(
    session: PollSession,
    player: PlayerctlClient,
    service: LyricsService,
    options: DisplayOptions,
    default_text: str = "♫",
) -> StatusOutput:
    outcome = player.get_playback()
    if not isinstance(outcome, PlaybackFound):
        return render_default(outcome.reason, default_text)

    state = outcome.state
    track_id = state.metadata.track_id
    if session.needs_refresh(track_id):
        fetched = service.get_lyrics(state.metadata)
        if isinstance(fetched, FetchFailed):
            return render_default(f"could not get lyric: {fetched.reason}", default_text)
        if track_id != session.track_id:
            logging.info(f"Track changed to {track_id} ('{state.metadata.track_name}')")
        bundle = fetched.bundle if isinstance(fetched, LyricsFound) else LyricsBundle()
        session.replace(track_id, bundle)

    return render_status(state, session.lyrics, options)


def run_loop(
    player: PlayerctlClient,
    service: LyricsService,
    options: DisplayOptions,
    interval: float = 0.2,
    default_text: str = "♫",
    emit: Callable[[str], None] = lambda line: print(line, flush=True),
    max_cycles: Optional[int] = None,
) -> None:
    """Poll forever (or max_cycles times), emitting one JSON line per cycle."""
    session = PollSession()
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        output = poll_once(session, player, service, options, default_text)
        emit(output.to_json())
        cycles += 1
        if max_cycles is None or cycles < max_cycles:
            time.sleep(interval)
