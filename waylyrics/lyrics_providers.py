from __future__ import annotations

from typing import Any, Dict, Optional, Protocol
import logging

import requests

from .exceptions import LyricsFetchError
from .lyrics_models import LyricsBundle, TrackMetadata


class BaseLyricsProvider(Protocol):
    def get_lyrics(self, track: TrackMetadata) -> Optional[LyricsBundle]:
        """Return the lyrics of a track, None when the service has none.

        Raises LyricsFetchError when the service could not be reached.
        """
        ...


def _variant_text(payload: Dict[str, Any], key: str) -> str:
    variant = payload.get(key) or {}
    if not isinstance(variant, dict):
        return ""
    lyric = variant.get("lyric")
    return lyric if isinstance(lyric, str) else ""


class NeteaseLyricsProvider:
    """NetEase Cloud Music lyric API, keyed by the NetEase song id."""

    BASE_URL = "https://music.163.com/api/song/lyric"

    def __init__(self, timeout: float = 3.0, user_agent: str = "Mozilla/5.0 (waylyrics)"):
        self._timeout = timeout
        self._ua = user_agent

    def get_lyrics(self, track: TrackMetadata) -> Optional[LyricsBundle]:
        if not track.track_id or not track.track_id.isdigit():
            logging.debug(f"NeteaseLyricsProvider: '{track.track_id}' is not a NetEase song id")
            return None

        params = {"id": track.track_id, "lv": 1, "kv": 1, "tv": -1}
        headers = {"User-Agent": self._ua}
        logging.debug(f"NeteaseLyricsProvider: Fetching lyrics for song id {track.track_id}")

        try:
            resp = requests.get(self.BASE_URL, params=params, headers=headers, timeout=self._timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            raise LyricsFetchError(f"NetEase request failed: {e}") from e
        except ValueError as e:
            raise LyricsFetchError(f"NetEase returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise LyricsFetchError("NetEase returned an unexpected payload")

        bundle = LyricsBundle.from_texts(
            original=_variant_text(payload, "lrc"),
            translated=_variant_text(payload, "tlyric"),
            phonetic=_variant_text(payload, "klyric"),
            source="NetEase",
        )
        logging.info(
            f"NeteaseLyricsProvider: song {track.track_id}: {len(bundle.original)} lines, "
            f"{len(bundle.translated)} translated, {len(bundle.phonetic)} phonetic"
        )
        return bundle


class LRCLibLyricsProvider:
    """lrclib.net lookup by title/artist/album/duration; original lyrics only."""

    BASE_URL = "https://lrclib.net/api/get"

    def __init__(self, timeout: float = 3.0, user_agent: str = "waylyrics (https://github.com/)"):
        self._timeout = timeout
        self._ua = user_agent

    def get_lyrics(self, track: TrackMetadata) -> Optional[LyricsBundle]:
        track_info = f"'{track.track_name}' by '{track.artist_name}'"
        logging.debug(f"LRCLibLyricsProvider: Fetching lyrics for {track_info}")

        params = {
            "track_name": track.track_name,
            "artist_name": track.artist_name,
            "album_name": track.album_name,
            "duration": max(0, int(round(track.duration_ms / 1000))),
        }
        headers = {"User-Agent": self._ua}

        try:
            resp = requests.get(self.BASE_URL, params=params, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise LyricsFetchError(f"LRCLib request failed: {e}") from e

        if resp.status_code == 404:
            logging.info(f"LRCLibLyricsProvider: No lyrics for {track_info}")
            return None
        if resp.status_code != 200:
            raise LyricsFetchError(f"LRCLib HTTP {resp.status_code} response")

        try:
            payload = resp.json()
        except ValueError as e:
            raise LyricsFetchError(f"LRCLib returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise LyricsFetchError("LRCLib returned an unexpected payload")

        synced = payload.get("syncedLyrics")
        if not isinstance(synced, str) or not synced.strip():
            logging.info(f"LRCLibLyricsProvider: No synced lyrics for {track_info} (LRCLIB ID: {payload.get('id')})")
            return None

        bundle = LyricsBundle.from_texts(original=synced, source="LRCLib")
        logging.info(f"LRCLibLyricsProvider: Parsed {len(bundle.original)} synced lines for {track_info}")
        return bundle


PROVIDERS = {
    "netease": NeteaseLyricsProvider,
    "lrclib": LRCLibLyricsProvider,
}


def build_provider(name: str, timeout: float) -> BaseLyricsProvider:
    try:
        factory = PROVIDERS[name]
    except KeyError:
        raise ValueError(f"Unknown lyrics provider: {name}") from None
    return factory(timeout=timeout)
