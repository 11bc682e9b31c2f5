"""
OpenCV presentation adapter: draws the current label, confidence bar and errors onto frames.
"""
import time
from typing import Optional

import cv2
import numpy as np

from .display import band_color
from .types import Label

BOUNCE_SECONDS = 0.5


class OverlayDisplay:
    """Draws the last shown label on top of each video frame."""

    def __init__(self, show_confidence: bool = True):
        """
        Initialize the overlay.

        Args:
            show_confidence: Draw the confidence bar (expression demo only)
        """
        self.show_confidence = show_confidence
        self.label: Optional[Label] = None
        self.error: Optional[str] = None
        self.swapped_at = 0.0

    def show_label(self, label: Label) -> None:
        """Swap to a new label and restart the bounce-in animation."""
        self.label = label
        self.error = None
        self.swapped_at = time.monotonic()

    def show_error(self, message: str) -> None:
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def _bounce_scale(self, t_now: float) -> float:
        """Text scale for the bounce-in: overshoots to 1.2 then settles at 1.0."""
        progress = (t_now - self.swapped_at) / BOUNCE_SECONDS
        if progress >= 1.0:
            return 1.0
        if progress < 0.6:
            return 0.3 + (1.2 - 0.3) * (progress / 0.6)
        return 1.2 - 0.2 * ((progress - 0.6) / 0.4)

    def render(self, frame: np.ndarray, t_now: Optional[float] = None) -> np.ndarray:
        """
        Draw the label panel onto the frame.

        Args:
            frame: BGR frame, modified in place
            t_now: Monotonic timestamp, defaults to now

        Returns:
            The same frame
        """
        if self.error is not None:
            return self.render_error(frame)
        if self.label is None:
            return frame

        t_now = time.monotonic() if t_now is None else t_now
        height, width = frame.shape[:2]

        # Panel background
        panel_top = height - 110
        overlay = frame.copy()
        cv2.rectangle(overlay, (0, panel_top), (width, height), (30, 30, 30), -1)
        cv2.addWeighted(overlay, 0.6, frame, 0.4, 0, frame)

        scale = self._bounce_scale(t_now)
        cv2.putText(frame, self.label.name, (20, panel_top + 45),
                    cv2.FONT_HERSHEY_SIMPLEX, 1.1 * scale, (255, 255, 255), 2)

        if self.show_confidence:
            confidence = self.label.confidence or 0
            bar_width = int((width - 40) * confidence / 100)
            cv2.rectangle(frame, (20, panel_top + 65), (width - 20, panel_top + 85), (80, 80, 80), -1)
            if bar_width > 0:
                cv2.rectangle(frame, (20, panel_top + 65), (20 + bar_width, panel_top + 85),
                              band_color(confidence), -1)
            cv2.putText(frame, f"{confidence}%", (width - 90, panel_top + 45),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 255, 255), 2)

        return frame

    def render_error(self, frame: np.ndarray) -> np.ndarray:
        """Draw the full-screen error state."""
        height, width = frame.shape[:2]
        frame[:] = (20, 20, 40)
        cv2.putText(frame, self.error or "", (20, height // 2),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (80, 80, 255), 2)
        cv2.putText(frame, "Press 'r' to retry or 'q' to quit", (20, height // 2 + 40),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1)
        return frame
