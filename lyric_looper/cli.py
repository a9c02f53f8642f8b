"""CLI interface: list segments, play them against an audio clock, edit settings."""

import argparse
import logging
import os
import sys
import time

from lyric_looper.clock import AudioClock
from lyric_looper.constants import (
    DEFAULT_LYRICS_FILE,
    DEFAULT_TAIL_SECONDS,
    TICK_SECONDS,
    VERSION,
)
from lyric_looper.models import Segment
from lyric_looper.parser import fit_tail_to_duration, format_timestamp, load_lyrics
from lyric_looper.player import SegmentPlayer
from lyric_looper.settings import load_settings, parse_mode, save_settings


class TerminalView:
    """Prints the lyric sheet once, then one line per highlight change."""

    def __init__(self, segments: list[Segment]):
        self.segments = segments
        self.active = None

    def render(self):
        for i, seg in enumerate(self.segments):
            print(_segment_row(i, seg))

    def highlight(self, index: int):
        if not 0 <= index < len(self.segments):
            return
        self.active = index
        seg = self.segments[index]
        print(f"▶ {index:03d} [{format_timestamp(seg.start)}] {seg.text}")


def _segment_row(index: int, seg: Segment) -> str:
    return f"{index:03d}  [{format_timestamp(seg.start)} → {format_timestamp(seg.end)}]  {seg.text}"


def _load_segments(lyrics_path: str, tail: float = DEFAULT_TAIL_SECONDS) -> list[Segment]:
    """Load and parse lyrics, exiting with an error if nothing usable is found."""
    try:
        segments = load_lyrics(lyrics_path, tail=tail)
    except FileNotFoundError:
        print(f"Error: File not found: {lyrics_path}", file=sys.stderr)
        raise SystemExit(1)
    except OSError as e:
        print(f"Error: Could not read {lyrics_path}: {e}", file=sys.stderr)
        raise SystemExit(1)

    if not segments:
        print(f"Error: No timestamped lines found in: {lyrics_path}", file=sys.stderr)
        raise SystemExit(1)
    return segments


def _tail_from(settings: dict) -> float:
    """tail_seconds from settings; must be a positive number."""
    value = settings.get("tail_seconds", DEFAULT_TAIL_SECONDS)
    try:
        tail = float(value)
    except (TypeError, ValueError):
        tail = 0.0
    if tail <= 0:
        print(f"Error: Invalid tail_seconds: {value}", file=sys.stderr)
        raise SystemExit(1)
    return tail


def _load_clock(audio_path: str | None) -> AudioClock:
    """Clock sized from the audio file, or an unbounded one without audio."""
    if not audio_path:
        return AudioClock()
    if not os.path.exists(audio_path):
        print(f"Error: File not found: {audio_path}", file=sys.stderr)
        raise SystemExit(1)
    try:
        return AudioClock.from_file(audio_path)
    except Exception as e:
        print(f"Error: Could not load audio file: {e}", file=sys.stderr)
        raise SystemExit(1)


def _run_clock(clock: AudioClock, seconds: float | None = None, speed: float = 1.0) -> float:
    """Tick the clock until playback stops, the time limit is hit, or Ctrl-C.

    Returns the media time elapsed.
    """
    elapsed = 0.0
    try:
        while not clock.paused:
            if seconds is not None and elapsed >= seconds:
                break
            time.sleep(TICK_SECONDS / speed)
            clock.advance(TICK_SECONDS)
            elapsed += TICK_SECONDS
    except KeyboardInterrupt:
        clock.pause()
        print("\nInterrupted.")
    return elapsed


def cmd_show(args):
    """List the parsed segments of a lyrics file."""
    segments = _load_segments(args.lyrics, tail=_tail_from(load_settings(args.lyrics)))
    for i, seg in enumerate(segments):
        print(_segment_row(i, seg))
    print(f"{len(segments)} segments")


def cmd_play(args):
    """Play segments against an audio clock with live highlighting."""
    settings = load_settings(args.lyrics)

    try:
        mode = parse_mode(args.mode or settings.get("mode"))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    if args.speed <= 0:
        print(f"Error: Invalid speed: {args.speed}", file=sys.stderr)
        raise SystemExit(1)

    segments = _load_segments(args.lyrics, tail=_tail_from(settings))
    clock = _load_clock(args.audio)

    if args.fit_tail and clock.duration is not None:
        segments = fit_tail_to_duration(segments, clock.duration)

    start = args.start if args.start is not None else settings.get("start", 0)
    if not isinstance(start, int) or not 0 <= start < len(segments):
        print(f"Error: Start index out of range: {start} (0-{len(segments) - 1})", file=sys.stderr)
        raise SystemExit(1)

    view = TerminalView(segments)
    view.render()
    print(f"Mode: {mode.value}")

    player = SegmentPlayer(segments, clock, on_highlight=view.highlight, mode=mode)
    player.select_segment(start)

    _run_clock(clock, seconds=args.seconds, speed=args.speed)
    print(f"Stopped at {format_timestamp(clock.current_time)}")


def cmd_set(args):
    """Update playback settings for a lyrics file."""
    if not os.path.exists(args.lyrics):
        print(f"Error: File not found: {args.lyrics}", file=sys.stderr)
        raise SystemExit(1)

    key = args.key
    value = args.value
    settings = load_settings(args.lyrics)

    valid_keys = {"mode", "tail", "start"}
    if key not in valid_keys:
        print(f"Error: Invalid setting key: {key}", file=sys.stderr)
        print(f"Valid keys: {', '.join(sorted(valid_keys))}", file=sys.stderr)
        raise SystemExit(1)

    if key == "mode":
        try:
            settings["mode"] = parse_mode(value).value
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            raise SystemExit(1)

    elif key == "tail":
        try:
            tail = float(value)
        except ValueError:
            print(f"Error: Invalid value: {value}", file=sys.stderr)
            raise SystemExit(1)
        if tail <= 0:
            print("Error: 'set tail' requires a positive number of seconds", file=sys.stderr)
            raise SystemExit(1)
        settings["tail_seconds"] = tail

    elif key == "start":
        try:
            start = int(value)
        except ValueError:
            print(f"Error: Invalid index: {value}", file=sys.stderr)
            raise SystemExit(1)
        if start < 0:
            print("Error: 'set start' requires a non-negative index", file=sys.stderr)
            raise SystemExit(1)
        settings["start"] = start

    path = save_settings(args.lyrics, settings)
    print(f"Updated: {key} → {value} ({path})")


def _configure_logging(verbose: bool):
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="lyric-looper",
        description="Lyric Looper — play timed lyric lines one segment at a time",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show
    show_parser = subparsers.add_parser("show", help="List the segments of a lyrics file")
    show_parser.add_argument("lyrics", nargs="?", default=DEFAULT_LYRICS_FILE, help="Path to the .lrc file")
    show_parser.set_defaults(func=cmd_show)

    # play
    play_parser = subparsers.add_parser("play", help="Play segments with live highlighting")
    play_parser.add_argument("lyrics", nargs="?", default=DEFAULT_LYRICS_FILE, help="Path to the .lrc file")
    play_parser.add_argument("--audio", help="Audio file that sets the media duration")
    mode_group = play_parser.add_mutually_exclusive_group()
    mode_group.add_argument("--continuous", dest="mode", action="store_const", const="continuous",
                            help="Advance through all segments")
    mode_group.add_argument("--repeat", dest="mode", action="store_const", const="repeat",
                            help="Loop the selected segment")
    play_parser.add_argument("--start", type=int, help="Index of the first segment to play")
    play_parser.add_argument("--seconds", type=float, help="Stop after this much media time")
    play_parser.add_argument("--speed", type=float, default=1.0, help="Clock speed multiplier")
    play_parser.add_argument("--fit-tail", action="store_true",
                             help="Clamp the last segment's end to the audio length")
    play_parser.set_defaults(func=cmd_play)

    # set
    set_parser = subparsers.add_parser("set", help="Update playback settings")
    set_parser.add_argument("lyrics", help="Path to the .lrc file")
    set_parser.add_argument("key", help="Setting key (mode, tail, start)")
    set_parser.add_argument("value", help="Setting value")
    set_parser.set_defaults(func=cmd_set)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    _configure_logging(args.verbose)
    args.func(args)
