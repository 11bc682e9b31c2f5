"""
The closed sets of labels each demo can show.
"""
from typing import Dict

from .types import Label


GESTURES: Dict[str, Label] = {
    "HAND_SHAKE": Label("HAND_SHAKE", "Hand Shake", "🤝"),
    "THUMBS_UP": Label("THUMBS_UP", "Thumbs Up", "👍"),
    "VICTORY": Label("VICTORY", "Victory / Two", "✌️"),
    "ONE": Label("ONE", "One", "1️⃣"),
    "THREE": Label("THREE", "Three", "3️⃣"),
    "FOUR": Label("FOUR", "Four", "4️⃣"),
    "FIVE": Label("FIVE", "High Five / Open Hand", "👋"),
    "CLOSED_FIST": Label("CLOSED_FIST", "Closed Fist", "✊"),
    "POINTING": Label("POINTING", "Pointing", "☝️"),
    "NONE": Label("NONE", "Show your hands", "👋"),
}

EXPRESSIONS: Dict[str, Label] = {
    "HAPPY": Label("HAPPY", "Happy", "😄"),
    "SAD": Label("SAD", "Sad", "😢"),
    "ANGRY": Label("ANGRY", "Angry", "😠"),
    "SURPRISED": Label("SURPRISED", "Surprised", "😲"),
    "NEUTRAL": Label("NEUTRAL", "Neutral", "😐"),
    "DISGUSTED": Label("DISGUSTED", "Disgusted", "🤢"),
    "FEARFUL": Label("FEARFUL", "Fearful", "😨"),
    "NONE": Label("NONE", "Show your face", "👤"),
}
