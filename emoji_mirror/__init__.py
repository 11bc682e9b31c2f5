"""
Emoji Mirror

Webcam demos that detect hand or face landmarks with MediaPipe and map each frame
to a gesture or facial expression label, shown as an emoji with a confidence bar.
"""

__version__ = "0.1.0"

from .types import Landmark, Label, DisplayState, DisplayProto
from .config import load_config, Cfg
from .labels import GESTURES, EXPRESSIONS
from .gestures import GestureClassifier, classify_gesture
from .expressions import classify_expression, face_metrics
from .display import DisplayUpdater, MockDisplay, confidence_band
from .channel import FrameSlot
from .errors import CameraError, CameraPermissionError, CameraNotFoundError

__all__ = [
    "Landmark",
    "Label",
    "DisplayState",
    "DisplayProto",
    "load_config",
    "Cfg",
    "GESTURES",
    "EXPRESSIONS",
    "GestureClassifier",
    "classify_gesture",
    "classify_expression",
    "face_metrics",
    "DisplayUpdater",
    "MockDisplay",
    "confidence_band",
    "FrameSlot",
    "CameraError",
    "CameraPermissionError",
    "CameraNotFoundError",
]
