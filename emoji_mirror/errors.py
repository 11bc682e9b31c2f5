"""
Camera errors surfaced to the user.
"""
import os
import sys
from pathlib import Path


class CameraError(RuntimeError):
    """Generic capture failure."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(self.user_message())

    def user_message(self) -> str:
        return f"Failed to access camera: {self.detail}"


class CameraPermissionError(CameraError):
    """The camera exists but we are not allowed to read it."""

    def user_message(self) -> str:
        return "Camera access denied. Please allow camera permissions."


class CameraNotFoundError(CameraError):
    """No camera device at the configured index."""

    def user_message(self) -> str:
        return "No camera found. Please connect a camera."


def camera_error_for(index: int, platform: str = sys.platform, dev_dir: str = "/dev") -> CameraError:
    """
    Work out why a camera failed to open.

    OpenCV only reports that opening failed, so on Linux the device node is
    inspected to tell a missing camera from a permission problem.

    Args:
        index: Camera index passed to VideoCapture
        platform: sys.platform value
        dev_dir: Directory holding video device nodes

    Returns:
        The most specific CameraError that applies
    """
    if platform.startswith("linux"):
        device = Path(dev_dir) / f"video{index}"
        if not device.exists():
            return CameraNotFoundError(str(device))
        if not os.access(device, os.R_OK):
            return CameraPermissionError(str(device))
    return CameraError(f"unable to open camera at index {index}")
