from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union
import logging
import time

from .exceptions import LyricsFetchError
from .lyrics_models import LyricsBundle, TrackMetadata
from .lyrics_providers import BaseLyricsProvider


@dataclass(frozen=True)
class LyricsFound:
    bundle: LyricsBundle


@dataclass(frozen=True)
class LyricsNotFound:
    bundle: LyricsBundle = field(default_factory=LyricsBundle)


@dataclass(frozen=True)
class FetchFailed:
    reason: str


FetchOutcome = Union[LyricsFound, LyricsNotFound, FetchFailed]


class LyricsService:
    """Runs lyrics providers in order, one request in flight at a time."""

    def __init__(
        self,
        providers: Sequence[BaseLyricsProvider],
        per_attempt_timeout: float = 3.0,
        retry_delays: Sequence[float] = (0.0, 0.15),
    ):
        self._providers: List[BaseLyricsProvider] = list(providers)
        self._timeout = per_attempt_timeout
        self._delays = list(retry_delays)
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._pending: Optional[Future] = None

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def get_lyrics(self, track: TrackMetadata) -> FetchOutcome:
        track_info = f"'{track.track_name}' by '{track.artist_name}' (id {track.track_id})"
        logging.info(f"Starting lyrics search for {track_info}")

        answered = False
        reason = "no lyrics providers configured"

        for provider in self._providers:
            provider_name = provider.__class__.__name__
            attempts = 1 + len(self._delays)
            for i in range(attempts):
                attempt_num = i + 1
                if self._pending is not None and not self._pending.done():
                    # a timed-out request is still running; never start a second one
                    return FetchFailed(f"{provider_name}: previous request still in flight")

                logging.debug(f"Provider {provider_name} attempt {attempt_num}/{attempts} (timeout: {self._timeout}s)")
                fut = self._executor.submit(provider.get_lyrics, track)
                self._pending = fut
                try:
                    bundle: Optional[LyricsBundle] = fut.result(timeout=self._timeout)
                except TimeoutError:
                    reason = f"{provider_name} timed out after {self._timeout}s"
                    logging.debug(f"Provider {provider_name} attempt {attempt_num} timed out")
                except LyricsFetchError as e:
                    reason = f"{provider_name}: {e}"
                    logging.debug(f"Provider {provider_name} attempt {attempt_num} failed: {e}")
                except Exception as e:
                    reason = f"{provider_name}: unexpected error: {e}"
                    logging.warning(f"Provider {provider_name} attempt {attempt_num} raised {e.__class__.__name__}: {e}")
                else:
                    answered = True
                    if bundle is not None and not bundle.is_empty():
                        logging.info(f"Retrieved lyrics from {provider_name} for {track_info} ({len(bundle.original)} lines)")
                        return LyricsFound(bundle)
                    logging.info(f"Provider {provider_name} has no lyrics for {track_info}")
                    break

                if i < len(self._delays):
                    logging.debug(f"Provider {provider_name} attempt {attempt_num} failed, retrying in {self._delays[i]}s")
                    time.sleep(self._delays[i])

        if answered:
            logging.info(f"No lyrics found for {track_info} from any provider")
            return LyricsNotFound()

        logging.warning(f"Lyrics fetch failed for {track_info}: {reason}")
        return FetchFailed(reason)
