"""
Thin wrapper around OpenCV VideoCapture.
"""
import logging
from typing import Optional

import cv2
import numpy as np

from .config import CameraConfig
from .errors import CameraError, camera_error_for

logger = logging.getLogger(__name__)


class Camera:
    """Capture adapter: a live frame source with start/stop control."""

    def __init__(self, cfg: CameraConfig, mirror: bool = True):
        self.cfg = cfg
        self.mirror = mirror
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self) -> None:
        """
        Open the camera device.

        Raises:
            CameraNotFoundError, CameraPermissionError or CameraError
        """
        if self._cap is not None:
            return

        cap = cv2.VideoCapture(self.cfg.index)
        if not cap.isOpened():
            cap.release()
            raise camera_error_for(self.cfg.index)

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.cfg.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.cfg.height)
        cap.set(cv2.CAP_PROP_FPS, self.cfg.fps)
        self._cap = cap
        logger.info("📷 Camera %d opened (%dx%d @ %dfps)",
                    self.cfg.index, self.cfg.width, self.cfg.height, self.cfg.fps)

    def read(self) -> np.ndarray:
        """
        Read one BGR frame.

        Raises:
            CameraError: camera not open or the read failed
        """
        if self._cap is None:
            raise CameraError("camera not opened")

        ret, frame = self._cap.read()
        if not ret:
            raise CameraError("failed to read frame from camera")

        if self.mirror:
            frame = cv2.flip(frame, 1)
        return frame

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info("📷 Camera %d released", self.cfg.index)
