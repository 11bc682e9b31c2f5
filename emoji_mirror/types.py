"""
Type definitions for the gesture and expression emoji demos.
"""
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class Landmark:
    """A single detected keypoint in normalized [0..1] frame coordinates."""
    x: float
    y: float
    z: float = 0.0  # depth, unused by the classifiers


# 21 points for a hand, 468 for a face
LandmarkSet = List[Landmark]


@dataclass(frozen=True)
class Label:
    """A classification outcome shown to the user."""
    key: str
    name: str
    emoji: str
    confidence: Optional[int] = None  # expressions only, 0..100

    def with_confidence(self, confidence: int) -> "Label":
        """Return a copy of this label carrying the given confidence."""
        return replace(self, confidence=confidence)


@dataclass
class DisplayState:
    """What is currently on screen. Only replaced when the label name changes."""
    current: Optional[Label] = None
    swaps: int = 0

    @property
    def confidence(self) -> int:
        if self.current is None or self.current.confidence is None:
            return 0
        return self.current.confidence


@runtime_checkable
class DisplayProto(Protocol):
    """Abstract protocol for presentation adapters that render labels."""

    def show_label(self, label: Label) -> None:
        """Swap the emoji, text and confidence bar to the given label."""
        ...

    def show_error(self, message: str) -> None:
        """Show a full-screen error message."""
        ...
