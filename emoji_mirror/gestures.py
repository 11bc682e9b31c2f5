"""
Gesture recognition: turns the hands detected in one frame into a single label.

Each frame is classified on its own. The decision logic is an ordered table of
rules evaluated first-match-wins, so precedence (hand shake before anything,
thumbs up before the finger counts) is visible in one place.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .config import GestureThresholds
from .labels import GESTURES
from .landmarks import (
    THUMB_TIP,
    WRIST,
    finger_down,
    finger_up,
    thumb_extended,
    wrist_distance,
)
from .types import Label, Landmark

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandFeatures:
    """Per-frame features of the first detected hand."""
    two_hands_close: bool
    thumb_extended: bool
    index_up: bool
    middle_up: bool
    ring_up: bool
    pinky_up: bool
    index_down: bool
    middle_down: bool
    ring_down: bool
    pinky_down: bool
    thumb_above_wrist: bool

    @property
    def fingers_up(self) -> int:
        """Extended finger count including the thumb (0-5)."""
        return sum((self.thumb_extended, self.index_up, self.middle_up,
                    self.ring_up, self.pinky_up))

    @property
    def all_fingers_down(self) -> bool:
        return self.index_down and self.middle_down and self.ring_down and self.pinky_down


@dataclass(frozen=True)
class Rule:
    """One entry of the gesture decision table."""
    name: str
    matches: Callable[[HandFeatures], bool]
    label: Label


# Order matters: the first rule that matches wins.
# A finger is "not down" when its tip is level with or above the PIP joint,
# which is why POINTING and VICTORY test `not *_down` rather than `*_up`.
GESTURE_RULES: List[Rule] = [
    Rule("hand_shake", lambda f: f.two_hands_close, GESTURES["HAND_SHAKE"]),
    Rule("thumbs_up",
         lambda f: f.thumb_extended and f.all_fingers_down and f.thumb_above_wrist,
         GESTURES["THUMBS_UP"]),
    Rule("closed_fist", lambda f: f.fingers_up == 0, GESTURES["CLOSED_FIST"]),
    Rule("pointing", lambda f: f.fingers_up == 1 and not f.index_down, GESTURES["POINTING"]),
    Rule("one", lambda f: f.fingers_up == 1, GESTURES["ONE"]),
    # No fallback for other pairs: middle+ring etc. end up as NONE
    Rule("victory",
         lambda f: f.fingers_up == 2 and not f.index_down and not f.middle_down,
         GESTURES["VICTORY"]),
    Rule("three", lambda f: f.fingers_up == 3, GESTURES["THREE"]),
    Rule("four", lambda f: f.fingers_up == 4, GESTURES["FOUR"]),
    Rule("five", lambda f: f.fingers_up == 5, GESTURES["FIVE"]),
]


def extract_hand_features(hands: Sequence[List[Landmark]],
                          thresholds: GestureThresholds) -> HandFeatures:
    """
    Compute the features the rules look at.

    Args:
        hands: One or two hand landmark sets (21 points each)
        thresholds: Distance thresholds

    Returns:
        Features of the first hand, plus whether two hands are close together
    """
    two_hands_close = (
        len(hands) == 2
        and wrist_distance(hands[0], hands[1]) < thresholds.handshake_distance
    )

    hand = hands[0]
    return HandFeatures(
        two_hands_close=two_hands_close,
        thumb_extended=thumb_extended(hand, thresholds.thumb_extension),
        index_up=finger_up(hand, 0),
        middle_up=finger_up(hand, 1),
        ring_up=finger_up(hand, 2),
        pinky_up=finger_up(hand, 3),
        index_down=finger_down(hand, 0),
        middle_down=finger_down(hand, 1),
        ring_down=finger_down(hand, 2),
        pinky_down=finger_down(hand, 3),
        thumb_above_wrist=hand[THUMB_TIP].y < hand[WRIST].y,
    )


class GestureClassifier:
    """Classifies the hands of a single frame into one of GESTURES."""

    def __init__(self, thresholds: Optional[GestureThresholds] = None,
                 rules: Optional[List[Rule]] = None):
        self.thresholds = thresholds or GestureThresholds()
        self.rules = rules if rules is not None else GESTURE_RULES

    def classify(self, hands: Sequence[List[Landmark]]) -> Label:
        """
        Classify the detected hands.

        Args:
            hands: Zero, one or two hand landmark sets

        Returns:
            Exactly one gesture label; GESTURES["NONE"] when nothing matches
        """
        if not hands:
            return GESTURES["NONE"]

        features = extract_hand_features(hands, self.thresholds)
        for rule in self.rules:
            if rule.matches(features):
                logger.debug("Gesture rule %s matched (%d fingers up)",
                             rule.name, features.fingers_up)
                return rule.label

        return GESTURES["NONE"]


_default_classifier = GestureClassifier()


def classify_gesture(hands: Sequence[List[Landmark]]) -> Label:
    """Classify with the default thresholds."""
    return _default_classifier.classify(hands)
