"""
Expression classifier - maps one face mesh to an expression label with a confidence
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .labels import EXPRESSIONS
from .landmarks import face_point
from .types import Label, Landmark

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaceMetrics:
    """Geometric measurements of one face, in normalized coordinate units."""
    avg_eye_openness: float
    mouth_aspect_ratio: float
    mouth_width: float
    avg_eyebrow_height: float  # more negative = eyebrows higher above the nose tip
    left_eyebrow_angle: float
    right_eyebrow_angle: float
    top_lip_y: float
    nose_tip_y: float


def face_metrics(landmarks: List[Landmark]) -> FaceMetrics:
    """
    Measure the features the expression rules use.

    Args:
        landmarks: 468 face mesh landmarks

    Returns:
        FaceMetrics for the face
    """
    def p(name: str) -> Landmark:
        return face_point(landmarks, name)

    left_eye_openness = abs(p('left_eye_top').y - p('left_eye_bottom').y)
    right_eye_openness = abs(p('right_eye_top').y - p('right_eye_bottom').y)

    mouth_height = abs(p('mouth_top').y - p('mouth_bottom').y)
    mouth_width = abs(p('mouth_left').x - p('mouth_right').x)
    mouth_aspect_ratio = mouth_height / mouth_width if mouth_width > 0 else 0.0

    nose_y = p('nose_tip').y
    left_brow_height = p('left_eyebrow_inner').y - nose_y
    right_brow_height = p('right_eyebrow_inner').y - nose_y

    return FaceMetrics(
        avg_eye_openness=(left_eye_openness + right_eye_openness) / 2,
        mouth_aspect_ratio=mouth_aspect_ratio,
        mouth_width=mouth_width,
        avg_eyebrow_height=(left_brow_height + right_brow_height) / 2,
        left_eyebrow_angle=p('left_eyebrow_outer').y - p('left_eyebrow_inner').y,
        right_eyebrow_angle=p('right_eyebrow_outer').y - p('right_eyebrow_inner').y,
        top_lip_y=p('mouth_top').y,
        nose_tip_y=nose_y,
    )


@dataclass(frozen=True)
class ExpressionRule:
    """One entry of the expression cascade."""
    matches: Callable[[FaceMetrics], bool]
    key: str
    confidence: int


# First match wins. The bands overlap (e.g. HAPPY and NEUTRAL) and are kept as is.
EXPRESSION_RULES: List[ExpressionRule] = [
    ExpressionRule(
        lambda m: m.mouth_aspect_ratio > 0.15 and m.mouth_width > 0.15 and m.avg_eye_openness < 0.03,
        "HAPPY", 90),
    ExpressionRule(
        lambda m: m.avg_eye_openness > 0.04 and m.mouth_aspect_ratio > 0.2,
        "SURPRISED", 90),
    ExpressionRule(
        lambda m: m.mouth_aspect_ratio < 0.08 and m.avg_eyebrow_height > -0.05,
        "SAD", 85),
    ExpressionRule(
        lambda m: (m.left_eyebrow_angle < -0.01 and m.right_eyebrow_angle > 0.01
                   and m.mouth_aspect_ratio < 0.1),
        "ANGRY", 85),
    ExpressionRule(
        lambda m: m.top_lip_y < m.nose_tip_y + 0.02 and m.mouth_aspect_ratio < 0.12,
        "DISGUSTED", 80),
    ExpressionRule(
        lambda m: (m.avg_eye_openness > 0.035 and m.avg_eyebrow_height < -0.08
                   and m.mouth_aspect_ratio > 0.12),
        "FEARFUL", 80),
    ExpressionRule(
        lambda m: m.mouth_aspect_ratio < 0.15 and 0.02 < m.avg_eye_openness < 0.04,
        "NEUTRAL", 75),
]

DEFAULT_EXPRESSION = ("NEUTRAL", 60)


def classify_metrics(metrics: FaceMetrics) -> Label:
    """Run the cascade over already computed metrics."""
    for rule in EXPRESSION_RULES:
        if rule.matches(metrics):
            return EXPRESSIONS[rule.key].with_confidence(rule.confidence)

    key, confidence = DEFAULT_EXPRESSION
    return EXPRESSIONS[key].with_confidence(confidence)


def classify_expression(faces: Sequence[List[Landmark]]) -> Label:
    """
    Classify the face detected in one frame.

    Args:
        faces: Zero or one face landmark sets (only the first is used)

    Returns:
        Expression label with confidence, or EXPRESSIONS["NONE"] with no confidence
    """
    if not faces:
        return EXPRESSIONS["NONE"]

    metrics = face_metrics(faces[0])
    label = classify_metrics(metrics)
    logger.debug("Expression %s (%d%%): MAR=%.3f eyes=%.3f brow=%.3f",
                 label.key, label.confidence, metrics.mouth_aspect_ratio,
                 metrics.avg_eye_openness, metrics.avg_eyebrow_height)
    return label
