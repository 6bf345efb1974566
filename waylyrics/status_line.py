"""Status-bar line rendering (waybar custom module JSON)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
import json

from .lyrics_models import LyricsBundle, PlaybackState, PlaybackStatus

# nerd-font glyphs: play while paused, pause while playing, stop while stopped
STATUS_ICONS = {
    PlaybackStatus.PAUSED: "▶",
    PlaybackStatus.PLAYING: "\uf04c",
    PlaybackStatus.STOPPED: "\uf04d",
}

CSS_CLASS = "lyrics"


@dataclass
class DisplayOptions:
    show_status: bool = True
    show_title: bool = True
    show_position: bool = True
    show_lyric: bool = True
    show_translate_lyric: bool = True
    show_phonetic: bool = False


@dataclass
class StatusOutput:
    text: str
    tooltip: str = ""
    class_: str = CSS_CLASS

    def to_dict(self) -> Dict[str, Any]:
        return {"class": self.class_, "text": self.text, "tooltip": self.tooltip}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


def ms_to_min_sec(ms: float) -> str:
    """Convert milliseconds to MM:SS."""
    seconds = int(ms) // 1000
    return f"{seconds // 60:02}:{seconds % 60:02}"


def format_duration(position_ms: float, length_ms: float) -> str:
    return f"{ms_to_min_sec(position_ms)}/{ms_to_min_sec(length_ms)}"


def render_status(state: PlaybackState, lyrics: LyricsBundle, options: DisplayOptions) -> StatusOutput:
    """Build the status line for one poll cycle.

    Args:
        state: Current player state
        lyrics: Lyrics of the playing track (may be empty)
        options: Which segments to show

    Returns:
        StatusOutput: Ready to print
    """
    meta = state.metadata
    position = state.position_ms
    text = ""

    if options.show_status:
        text += STATUS_ICONS[state.status] + " "
    if options.show_title:
        text += meta.track_name
    if options.show_position:
        text += f" ({format_duration(position, meta.duration_ms)})"
    if options.show_lyric:
        lyric = lyrics.original.get_no_space_lyric(position)
        if lyric:
            text += f" - {lyric}"
    if options.show_translate_lyric:
        trans = lyrics.translated.get_no_space_lyric(position)
        if trans:
            text += f" [{trans}]"
    if options.show_phonetic:
        phonetic = lyrics.phonetic.get_lyric(position)
        if phonetic and phonetic.strip():
            text += f" {{{phonetic}}}"

    tooltip = meta.track_name
    if meta.artist_name:
        tooltip += f" - {meta.artist_name}"
    return StatusOutput(text=text, tooltip=tooltip)


def render_default(message: str, default_text: str = "♫") -> StatusOutput:
    """Fallback line shown when a cycle could not complete."""
    return StatusOutput(text=default_text, tooltip=message)
