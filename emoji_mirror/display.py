"""
Display updating: debounces label changes and forwards them to a presentation adapter.
"""
import logging
from typing import List, Literal, Optional, Tuple

from .types import DisplayProto, DisplayState, Label

logger = logging.getLogger(__name__)

Band = Literal["high", "medium", "low"]

# BGR colours for the confidence bar
BAND_COLORS = {
    "high": (170, 230, 0),     # green-teal
    "medium": (0, 165, 255),   # amber-orange
    "low": (226, 43, 138),     # blue-violet
}


def confidence_band(confidence: Optional[int]) -> Band:
    """
    Map a confidence percentage to its colour band.

    Args:
        confidence: 0..100, or None when no label carries one

    Returns:
        "high" for >= 80, "medium" for 50-79, "low" below 50
    """
    value = confidence or 0
    if value >= 80:
        return "high"
    if value >= 50:
        return "medium"
    return "low"


def band_color(confidence: Optional[int]) -> Tuple[int, int, int]:
    return BAND_COLORS[confidence_band(confidence)]


class DisplayUpdater:
    """
    Pushes labels to a display, but only when the label name changes.

    Confidence is refreshed together with the name: a new confidence under the
    same name is not shown until the name changes.
    """

    def __init__(self, display: DisplayProto, state: Optional[DisplayState] = None):
        self.display = display
        self.state = state if state is not None else DisplayState()

    def update(self, label: Optional[Label]) -> bool:
        """
        Show a newly classified label.

        Args:
            label: Label for the current frame

        Returns:
            True if the display was updated
        """
        current = self.state.current
        if label is None or (current is not None and label.name == current.name):
            return False

        self.state.current = label
        self.state.swaps += 1
        self.display.show_label(label)

        if label.confidence is None:
            logger.info("%s %s", label.emoji, label.name)
        else:
            logger.info("%s %s (%d%%)", label.emoji, label.name, label.confidence)
        return True

    def reset(self) -> None:
        """Forget the shown label so the next one is always displayed."""
        self.state.current = None


class MockDisplay:
    """Mock display that records what it was asked to show."""

    def __init__(self):
        """Initialize the mock display."""
        self.labels: List[Label] = []
        self.errors: List[str] = []

    @property
    def label_count(self) -> int:
        return len(self.labels)

    def show_label(self, label: Label) -> None:
        """Record the label instead of drawing it."""
        self.labels.append(label)
        logger.debug("[MockDisplay] label=%s (call #%d)", label.key, len(self.labels))

    def show_error(self, message: str) -> None:
        """Record the error message instead of drawing it."""
        self.errors.append(message)
        logger.debug("[MockDisplay] error=%s", message)

    def reset_counters(self) -> None:
        """Reset recorded calls for testing."""
        self.labels.clear()
        self.errors.clear()
