"""
Preview Player Model
Server-side mirror of the state machine the generated script runs in the
browser: overlay shown -> playing -> paused <-> playing -> ended.
"""
from typing import Any, Dict, Optional

from .curve import progress_for_time
from .models import PlayerConfig


class PreviewPlayer:
    """Tracks what a viewer would see for a given sequence of events."""

    def __init__(self, config: PlayerConfig):
        self.config = config
        self.overlay_visible = True
        self.muted = True
        # Muted autoplay starts immediately
        self.playing = True
        self.pause_icon_visible = False
        self.ended = False
        self.current_time = 0.0
        self.duration: Optional[float] = None
        self.progress = 0.0

    def click_overlay(self) -> None:
        """Unmute, restart from zero and dismiss the overlay for good."""
        if not self.overlay_visible:
            return
        self.overlay_visible = False
        self.muted = False
        self.current_time = 0.0
        self.playing = True
        self.ended = False
        self.pause_icon_visible = False

    def click_video(self) -> None:
        # The overlay covers the video until it is dismissed
        if self.overlay_visible:
            return
        if self.playing:
            self.playing = False
            self.pause_icon_visible = True
        else:
            # Playing an ended video starts over
            if self.ended:
                self.current_time = 0.0
            self.playing = True
            self.ended = False
            self.pause_icon_visible = False

    def time_update(self, current_time: float, duration: Optional[float]) -> None:
        percent = progress_for_time(current_time, duration, self.config.retention_curve_exponent)
        if percent is None:
            return
        self.current_time = current_time
        self.duration = duration
        self.progress = percent

    def finish(self) -> None:
        """Playback reached the end."""
        self.ended = True
        self.playing = False
        self.progress = 100.0
        self.pause_icon_visible = False

    def snapshot(self) -> Dict[str, Any]:
        return {
            "overlayVisible": self.overlay_visible,
            "muted": self.muted,
            "playing": self.playing,
            "pauseIconVisible": self.pause_icon_visible,
            "ended": self.ended,
            "currentTime": self.current_time,
            "duration": self.duration,
            "progress": self.progress,
        }
