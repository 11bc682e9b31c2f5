"""
Landmark indices and geometry helpers shared by the classifiers.
"""
import math
from typing import List

from .types import Landmark


# Hand landmarks (MediaPipe Hands numbering)
WRIST = 0
THUMB_TIP = 4
INDEX_MCP = 5

# Index, middle, ring, pinky
FINGER_TIPS = [8, 12, 16, 20]
FINGER_PIPS = [6, 10, 14, 18]

# Face mesh landmarks (MediaPipe Face Mesh numbering)
FACE_INDICES = {
    'left_eye_top': 159,
    'left_eye_bottom': 145,
    'right_eye_top': 386,
    'right_eye_bottom': 374,
    'mouth_left': 61,
    'mouth_right': 291,
    'mouth_top': 13,
    'mouth_bottom': 14,
    'nose_tip': 1,
    'left_eyebrow_inner': 55,
    'left_eyebrow_outer': 70,
    'right_eyebrow_inner': 285,
    'right_eyebrow_outer': 300,
}


def distance(a: Landmark, b: Landmark) -> float:
    """
    Euclidean distance between two landmarks in the image plane.

    Args:
        a: First landmark
        b: Second landmark

    Returns:
        Distance in normalized units (z is ignored)
    """
    return math.hypot(a.x - b.x, a.y - b.y)


def finger_up(landmarks: List[Landmark], finger: int) -> bool:
    """
    Check if one of the four non-thumb fingers is extended.

    Args:
        landmarks: List of 21 hand landmarks
        finger: 0=index, 1=middle, 2=ring, 3=pinky

    Returns:
        True if the fingertip is higher on screen than its PIP joint
    """
    # tip y < pip y (inverted y-axis)
    return landmarks[FINGER_TIPS[finger]].y < landmarks[FINGER_PIPS[finger]].y


def finger_down(landmarks: List[Landmark], finger: int) -> bool:
    """Strict opposite of finger_up: a tip level with its PIP is neither."""
    return landmarks[FINGER_TIPS[finger]].y > landmarks[FINGER_PIPS[finger]].y


def thumb_extended(landmarks: List[Landmark], threshold: float = 0.1) -> bool:
    """
    Check if the thumb is extended away from the palm.

    Args:
        landmarks: List of 21 hand landmarks
        threshold: Minimum thumb tip to index MCP distance

    Returns:
        True if the thumb tip is far enough from the index finger base
    """
    return distance(landmarks[THUMB_TIP], landmarks[INDEX_MCP]) > threshold


def fingers_extended(landmarks: List[Landmark], thumb_threshold: float = 0.1) -> int:
    """
    Count the number of extended fingers, thumb included.

    Args:
        landmarks: List of 21 hand landmarks
        thumb_threshold: Thumb extension distance threshold

    Returns:
        Number of extended fingers (0-5)
    """
    count = 1 if thumb_extended(landmarks, thumb_threshold) else 0
    count += sum(1 for finger in range(4) if finger_up(landmarks, finger))
    return count


def wrist_distance(hand_a: List[Landmark], hand_b: List[Landmark]) -> float:
    """Distance between the wrists of two hands."""
    return distance(hand_a[WRIST], hand_b[WRIST])


def face_point(landmarks: List[Landmark], name: str) -> Landmark:
    """Look up a named face mesh landmark."""
    return landmarks[FACE_INDICES[name]]
