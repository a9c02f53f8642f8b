"""Parse LRC-style timestamped text into contiguous timed segments."""

import re
from dataclasses import replace

from lyric_looper.models import Segment
from lyric_looper.constants import DEFAULT_TAIL_SECONDS

# [mm:ss] / [mm:ss.f] / [mm:ss.ff] followed by the line text
_LINE_RE = re.compile(r"\[(\d{2}):(\d{2}(?:\.\d{1,2})?)\](.*)")


def parse_lrc(text: str, tail: float = DEFAULT_TAIL_SECONDS) -> list[Segment]:
    """Parse timestamped lyric text into a list of Segments ordered by start.

    Lines that don't carry a timestamp are skipped. Each segment ends where
    the next one starts; the last segment ends ``tail`` seconds after its
    own start.
    """
    entries = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        match = _LINE_RE.search(line)
        if not match:
            continue
        start = int(match.group(1)) * 60 + float(match.group(2))
        entries.append((start, match.group(3).strip()))

    entries.sort(key=lambda entry: entry[0])

    segments = []
    for i, (start, line_text) in enumerate(entries):
        if i < len(entries) - 1:
            end = entries[i + 1][0]
        else:
            end = start + tail
        segments.append(Segment(start=start, end=end, text=line_text))

    return segments


def load_lyrics(path: str, tail: float = DEFAULT_TAIL_SECONDS) -> list[Segment]:
    """Read a lyrics file and parse it. I/O errors propagate to the caller."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return parse_lrc(text, tail=tail)


def fit_tail_to_duration(segments: list[Segment], duration: float) -> list[Segment]:
    """Clamp the last segment's end to the media duration.

    The synthesized tail can run past the end of the audio, in which case the
    boundary would never be reached. Returns a new list; segments whose tail
    already fits are returned unchanged.
    """
    if not segments:
        return []
    last = segments[-1]
    if last.start < duration < last.end:
        return segments[:-1] + [replace(last, end=duration)]
    return list(segments)


def format_timestamp(seconds: float) -> str:
    """Format seconds as mm:ss.xx."""
    seconds = max(0.0, float(seconds))
    minutes = int(seconds) // 60
    return f"{minutes:02d}:{seconds % 60:05.2f}"
