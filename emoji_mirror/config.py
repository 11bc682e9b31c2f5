"""
Configuration management for the emoji mirror demos.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class HandsConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class FaceMeshConfig:
    """MediaPipe Face Mesh configuration settings."""
    max_num_faces: int
    refine_landmarks: bool
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GestureThresholds:
    """Distance thresholds for the gesture classifier, in normalized units."""
    handshake_distance: float = 0.25
    thumb_extension: float = 0.1


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    mirror: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    hands: HandsConfig
    face_mesh: FaceMeshConfig
    gestures: GestureThresholds
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Keys missing from a user file fall back to the packaged defaults.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    data = _read_yaml(DEFAULT_CONFIG_PATH)

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = _merge(data, _read_yaml(config_path))

    cfg = _dict_to_config(data)
    _validate(cfg)
    return cfg


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay override onto base."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict):
            if not isinstance(value, dict):
                raise ValueError(f"Config section {key!r} must be a mapping, got {value!r}")
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=int(camera_data['index']),
        width=int(camera_data['width']),
        height=int(camera_data['height']),
        fps=int(camera_data['fps'])
    )

    hands_data = data['hands']
    hands = HandsConfig(
        max_num_hands=int(hands_data['max_num_hands']),
        model_complexity=int(hands_data['model_complexity']),
        min_detection_confidence=float(hands_data['min_detection_confidence']),
        min_tracking_confidence=float(hands_data['min_tracking_confidence'])
    )

    face_data = data['face_mesh']
    face_mesh = FaceMeshConfig(
        max_num_faces=int(face_data['max_num_faces']),
        refine_landmarks=bool(face_data['refine_landmarks']),
        min_detection_confidence=float(face_data['min_detection_confidence']),
        min_tracking_confidence=float(face_data['min_tracking_confidence'])
    )

    gestures_data = data['gestures']
    gestures = GestureThresholds(
        handshake_distance=float(gestures_data['handshake_distance']),
        thumb_extension=float(gestures_data['thumb_extension'])
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=bool(display_data['show_landmarks']),
        mirror=bool(display_data['mirror']),
        window_name=str(display_data['window_name'])
    )

    return Cfg(
        camera=camera,
        hands=hands,
        face_mesh=face_mesh,
        gestures=gestures,
        display=display
    )


def _validate(cfg: Cfg) -> None:
    for section, conf in (("hands", cfg.hands), ("face_mesh", cfg.face_mesh)):
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            value = getattr(conf, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{section}.{name} must be in [0, 1], got {value}")

    if not 1 <= cfg.hands.max_num_hands <= 2:
        raise ValueError(f"hands.max_num_hands must be 1 or 2, got {cfg.hands.max_num_hands}")
    if cfg.hands.model_complexity not in (0, 1):
        raise ValueError(f"hands.model_complexity must be 0 or 1, got {cfg.hands.model_complexity}")
    if cfg.face_mesh.max_num_faces < 1:
        raise ValueError("face_mesh.max_num_faces must be at least 1")

    if cfg.gestures.handshake_distance <= 0 or cfg.gestures.thumb_extension <= 0:
        raise ValueError("gesture thresholds must be positive")
