"""Timestamp grammar for line-timed (LRC) lyric transcripts."""
from __future__ import annotations

import re
from typing import Iterator, List, Tuple

# [mm:ss.f], [mm:ss.ff] or [mm:ss.fff]
TIME_TAG = re.compile(r"\[(\d{2}):(\d{2})\.(\d{1,3})\]")


def _to_int(digits: str) -> int:
    try:
        return int(digits)
    except (TypeError, ValueError):
        return 0


def fraction_to_ms(fraction: str) -> int:
    """Scale a 1-3 digit fractional-second group to milliseconds.

    "5" -> 500, "50" -> 500, "500" -> 500, "05" -> 50.
    """
    fraction = fraction[:3]
    return _to_int(fraction) * 10 ** (3 - len(fraction))


def parse_time_tags(line: str) -> Tuple[List[int], int]:
    """Extract every timestamp tag from a single transcript line.

    Args:
        line: One line of transcript text

    Returns:
        tuple: (timestamps in ms, left to right; offset just past the last tag).
               The offset is 0 when the line has no tag.
    """
    times: List[int] = []
    end = 0
    for m in TIME_TAG.finditer(line):
        minutes = _to_int(m.group(1))
        seconds = _to_int(m.group(2))
        times.append((minutes * 60 + seconds) * 1000 + fraction_to_ms(m.group(3)))
        end = m.end()
    return times, end


def iter_tagged_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (start_time_ms, words) for every tag in a transcript, in source order.

    Lines without a tag are skipped. All tags of one line share the text
    following the last tag.
    """
    for raw in (text or "").splitlines():
        times, end = parse_time_tags(raw)
        if not times:
            continue
        words = raw[end:]
        for start_ms in times:
            yield start_ms, words
