"""
Landmark providers backed by MediaPipe Hands and Face Mesh.
"""
from typing import FrozenSet, List, Tuple

import cv2
import mediapipe as mp
import numpy as np

from .config import FaceMeshConfig, HandsConfig
from .types import Landmark


def _to_landmarks(mp_landmarks) -> List[Landmark]:
    return [Landmark(lm.x, lm.y, lm.z) for lm in mp_landmarks.landmark]


def draw_landmark_sets(frame: np.ndarray, landmark_sets: List[List[Landmark]],
                       connections: FrozenSet[Tuple[int, int]],
                       line_color=(254, 242, 0), point_color=(255, 255, 255),
                       radius: int = 3, thickness: int = 2) -> np.ndarray:
    """
    Draw skeleton overlays on the frame.

    Args:
        frame: BGR frame, modified in place
        landmark_sets: Landmark sets in [0..1] coordinates
        connections: Pairs of landmark indices to join with lines

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for landmarks in landmark_sets:
        points = [(int(lm.x * width), int(lm.y * height)) for lm in landmarks]
        for start, end in connections:
            cv2.line(frame, points[start], points[end], line_color, thickness)
        if radius > 0:
            for px, py in points:
                cv2.circle(frame, (px, py), radius, point_color, -1)

    return frame


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: 0 (lite) or 1 (full)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    @classmethod
    def from_config(cls, cfg: HandsConfig) -> "HandsTracker":
        return cls(
            max_num_hands=cfg.max_num_hands,
            model_complexity=cfg.model_complexity,
            min_detection_conf=cfg.min_detection_confidence,
            min_tracking_conf=cfg.min_tracking_confidence
        )

    def process(self, frame_bgr: np.ndarray) -> List[List[Landmark]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            One list of 21 landmarks per detected hand (possibly empty)
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return []
        return [_to_landmarks(hand) for hand in results.multi_hand_landmarks]

    def draw(self, frame: np.ndarray, hands: List[List[Landmark]]) -> np.ndarray:
        return draw_landmark_sets(frame, hands, self.mp_hands.HAND_CONNECTIONS)

    def close(self) -> None:
        self.hands.close()


class FaceMeshTracker:
    """Face landmark tracker using MediaPipe Face Mesh."""

    def __init__(self, max_num_faces: int = 1, refine_landmarks: bool = False,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        self.mp_face_mesh = mp.solutions.face_mesh
        self.face_mesh = self.mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=max_num_faces,
            refine_landmarks=refine_landmarks,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    @classmethod
    def from_config(cls, cfg: FaceMeshConfig) -> "FaceMeshTracker":
        return cls(
            max_num_faces=cfg.max_num_faces,
            refine_landmarks=cfg.refine_landmarks,
            min_detection_conf=cfg.min_detection_confidence,
            min_tracking_conf=cfg.min_tracking_confidence
        )

    def process(self, frame_bgr: np.ndarray) -> List[List[Landmark]]:
        """Return one list of face mesh landmarks per detected face."""
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        frame_rgb.flags.writeable = False
        results = self.face_mesh.process(frame_rgb)

        if not results.multi_face_landmarks:
            return []
        return [_to_landmarks(face) for face in results.multi_face_landmarks]

    def draw(self, frame: np.ndarray, faces: List[List[Landmark]]) -> np.ndarray:
        return draw_landmark_sets(frame, faces, self.mp_face_mesh.FACEMESH_TESSELATION,
                                  line_color=(200, 200, 200), radius=0, thickness=1)

    def close(self) -> None:
        self.face_mesh.close()
