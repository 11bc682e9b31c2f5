"""
Test cases for configuration loading and camera error mapping.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from emoji_mirror.config import load_config
from emoji_mirror.errors import (
    CameraError,
    CameraNotFoundError,
    CameraPermissionError,
    camera_error_for,
)


class TestLoadConfig(unittest.TestCase):
    """Test the packaged defaults and user overrides."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write(self, text: str) -> str:
        path = Path(self.tmpdir.name) / "config.yaml"
        path.write_text(text)
        return str(path)

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg.hands.max_num_hands, 2)
        self.assertEqual(cfg.hands.model_complexity, 1)
        self.assertEqual(cfg.hands.min_detection_confidence, 0.5)
        self.assertEqual(cfg.hands.min_tracking_confidence, 0.5)
        self.assertEqual(cfg.face_mesh.max_num_faces, 1)
        self.assertEqual(cfg.gestures.handshake_distance, 0.25)
        self.assertEqual(cfg.gestures.thumb_extension, 0.1)
        self.assertEqual((cfg.camera.width, cfg.camera.height), (1280, 720))

    def test_partial_override(self):
        path = self.write("camera:\n  index: 2\ngestures:\n  handshake_distance: 0.3\n")
        cfg = load_config(path)
        self.assertEqual(cfg.camera.index, 2)
        self.assertEqual(cfg.camera.width, 1280)
        self.assertEqual(cfg.gestures.handshake_distance, 0.3)
        self.assertEqual(cfg.gestures.thumb_extension, 0.1)

    def test_empty_file_uses_defaults(self):
        cfg = load_config(self.write(""))
        self.assertEqual(cfg.hands.max_num_hands, 2)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(str(Path(self.tmpdir.name) / "missing.yaml"))

    def test_invalid_confidence(self):
        path = self.write("hands:\n  min_detection_confidence: 1.5\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_invalid_hand_count(self):
        path = self.write("hands:\n  max_num_hands: 3\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_non_mapping_file(self):
        with self.assertRaises(ValueError):
            load_config(self.write("- just\n- a list\n"))

    def test_null_section_rejected(self):
        with self.assertRaisesRegex(ValueError, "camera"):
            load_config(self.write("camera: null\n"))

    def test_scalar_section_rejected(self):
        with self.assertRaises(ValueError):
            load_config(self.write("gestures: 0.3\n"))


class TestCameraErrors(unittest.TestCase):
    """Test user-facing messages and failure diagnosis."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def test_messages(self):
        self.assertEqual(CameraPermissionError().user_message(),
                         "Camera access denied. Please allow camera permissions.")
        self.assertEqual(CameraNotFoundError().user_message(),
                         "No camera found. Please connect a camera.")
        self.assertEqual(str(CameraError("device busy")),
                         "Failed to access camera: device busy")

    def test_hierarchy(self):
        self.assertTrue(issubclass(CameraNotFoundError, CameraError))
        self.assertTrue(issubclass(CameraPermissionError, CameraError))

    def test_missing_device_is_not_found(self):
        error = camera_error_for(0, platform="linux", dev_dir=self.tmpdir.name)
        self.assertIsInstance(error, CameraNotFoundError)

    @unittest.skipIf(hasattr(os, "geteuid") and os.geteuid() == 0, "root can read any file")
    def test_unreadable_device_is_permission_error(self):
        device = Path(self.tmpdir.name) / "video0"
        device.touch()
        device.chmod(0)
        error = camera_error_for(0, platform="linux", dev_dir=self.tmpdir.name)
        self.assertIsInstance(error, CameraPermissionError)

    def test_readable_device_is_generic_error(self):
        (Path(self.tmpdir.name) / "video1").touch()
        error = camera_error_for(1, platform="linux", dev_dir=self.tmpdir.name)
        self.assertIs(type(error), CameraError)

    def test_other_platforms_are_generic(self):
        error = camera_error_for(0, platform="darwin", dev_dir=self.tmpdir.name)
        self.assertIs(type(error), CameraError)
        self.assertIn("index 0", error.user_message())


if __name__ == '__main__':
    unittest.main()
