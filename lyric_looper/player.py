"""Segment playback state machine: click-to-seek, repeat and continuous modes."""

import logging
from typing import Callable

from lyric_looper.clock import Subscription, TimeSource
from lyric_looper.models import PlaybackState, PlayMode, Segment

logger = logging.getLogger(__name__)


class SegmentPlayer:
    """Plays one segment at a time against a time source.

    Holds at most one live progress subscription. Every activation cancels
    the previous one before seeking, so a boundary check for an old segment
    can never fire after a new segment starts.
    """

    def __init__(
        self,
        segments: list[Segment],
        source: TimeSource,
        on_highlight: Callable[[int], None] | None = None,
        mode: PlayMode = PlayMode.REPEAT,
    ):
        self._segments = tuple(segments)
        self.source = source
        self.on_highlight = on_highlight
        self.state = PlaybackState(mode=mode)
        self._subscription: Subscription | None = None

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def current_index(self) -> int | None:
        return self.state.current_index

    @property
    def current_segment(self) -> Segment | None:
        if self.state.current_index is None:
            return None
        return self._segments[self.state.current_index]

    @property
    def mode(self) -> PlayMode:
        return self.state.mode

    @mode.setter
    def mode(self, mode: PlayMode) -> None:
        # Only affects the next boundary crossing
        self.state.mode = mode

    def toggle_mode(self) -> PlayMode:
        if self.state.mode is PlayMode.REPEAT:
            self.state.mode = PlayMode.CONTINUOUS
        else:
            self.state.mode = PlayMode.REPEAT
        return self.state.mode

    @property
    def is_subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._segments)

    def _highlight(self, index: int) -> None:
        if self.on_highlight is not None:
            self.on_highlight(index)

    def select_segment(self, index: int) -> None:
        """Handle a user click on a segment.

        Clicking the current segment toggles pause/resume in place; clicking
        any other segment starts it from the beginning.
        """
        if not self._in_range(index):
            return

        if index == self.state.current_index:
            if not self.source.paused:
                self.source.pause()
            else:
                self.source.play()
        else:
            self.state.current_index = index
            self.activate(index)

        self._highlight(index)

    def activate(self, index: int) -> None:
        """Seek to a segment's start, play, and watch for its end."""
        if not self._in_range(index):
            return

        self._cancel_subscription()

        segment = self._segments[index]
        logger.debug("Activating segment %d (%.2f-%.2f)", index, segment.start, segment.end)
        self.source.pause()
        self.source.current_time = segment.start
        self.source.play()

        def on_progress():
            if self.source.current_time < segment.end:
                return
            self.source.pause()
            subscription.cancel()
            if self._subscription is subscription:
                self._subscription = None
            self._on_boundary(index)

        subscription = self.source.subscribe(on_progress)
        self._subscription = subscription

    def _on_boundary(self, index: int) -> None:
        logger.debug("Reached end of segment %d (%s)", index, self.state.mode.value)
        if self.state.mode is PlayMode.CONTINUOUS:
            next_index = index + 1
            if next_index < len(self._segments):
                self.state.current_index = next_index
                self.activate(next_index)
                self._highlight(next_index)
            else:
                logger.debug("Last segment finished")
        else:
            self.activate(index)
            self._highlight(index)

    def _cancel_subscription(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
