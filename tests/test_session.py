"""
Integration tests for the capture -> classify -> display pipeline, using fake
camera and landmark providers so no device or model is needed.
"""
import asyncio
import threading
import time
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from emoji_mirror.channel import SlotClosed
from emoji_mirror.display import DisplayUpdater, MockDisplay
from emoji_mirror.errors import CameraError, CameraNotFoundError
from emoji_mirror.expressions import classify_expression
from emoji_mirror.gestures import classify_gesture
from emoji_mirror.labels import GESTURES
from emoji_mirror.session import Session

from test_expressions import make_face
from test_gestures import make_hand


class FakeCamera:
    """Frame source that hands out numbered frames."""

    def __init__(self, fail_after=None, open_error=None):
        self.fail_after = fail_after
        self.open_error = open_error
        self.is_open = False
        self.open_count = 0
        self.reads = 0

    def open(self):
        if self.open_error is not None:
            raise self.open_error
        self.is_open = True
        self.open_count += 1

    def read(self):
        if not self.is_open:
            raise CameraError("camera not opened")
        if self.fail_after is not None and self.reads >= self.fail_after:
            raise CameraError("failed to read frame from camera")
        self.reads += 1
        time.sleep(0.001)
        return self.reads

    def close(self):
        self.is_open = False


class SlowCamera(FakeCamera):
    """Camera whose read() blocks for a while and notices a close() under it."""

    def __init__(self, delay=0.3):
        super().__init__()
        self.delay = delay
        self.reading = threading.Event()
        self.in_read = False
        self.closed_during_read = False

    def read(self):
        self.in_read = True
        self.reading.set()
        try:
            time.sleep(self.delay)
            return super().read()
        finally:
            self.in_read = False

    def close(self):
        if self.in_read:
            self.closed_during_read = True
        super().close()


class BrokenCamera(FakeCamera):
    """Camera whose read() fails with something other than CameraError."""

    def read(self):
        raise ValueError("bad frame buffer")


class ScriptedProvider:
    """Landmark provider that replays a fixed detection for every frame."""

    def __init__(self, landmark_sets):
        self.landmark_sets = landmark_sets
        self.frames = []
        self.closed = False

    def process(self, frame):
        self.frames.append(frame)
        return self.landmark_sets

    def close(self):
        self.closed = True


def make_session(provider, camera=None, classify=classify_gesture, mode="hands"):
    display = MockDisplay()
    session = Session(
        mode=mode,
        source=camera or FakeCamera(),
        provider=provider,
        classify=classify,
        updater=DisplayUpdater(display),
    )
    return session, display


class TestSession(unittest.IsolatedAsyncioTestCase):
    """Test one session end to end."""

    async def test_frames_flow_to_display(self):
        provider = ScriptedProvider([make_hand(up=["index", "middle"])])
        session, display = make_session(provider)

        await session.start()
        for _ in range(3):
            frame = await session.next_frame()
            label, landmark_sets = session.process_frame(frame)
            self.assertEqual(label, GESTURES["VICTORY"])
        await session.stop()

        self.assertEqual(session.frames_processed, 3)
        # Same label three times is shown once
        self.assertEqual(display.label_count, 1)
        self.assertFalse(session.source.is_open)

    async def test_empty_detection_shows_none(self):
        session, display = make_session(ScriptedProvider([]))
        label, _ = session.process_frame(frame=object())
        self.assertEqual(label, GESTURES["NONE"])
        self.assertEqual(display.labels, [GESTURES["NONE"]])

    async def test_expression_session(self):
        provider = ScriptedProvider([make_face(eye_openness=0.01, mouth_height=0.04)])
        session, display = make_session(provider, classify=classify_expression, mode="face")
        label, _ = session.process_frame(frame=object())
        self.assertEqual(label.key, "HAPPY")
        self.assertEqual(session.updater.state.confidence, 90)

    async def test_open_failure_propagates(self):
        camera = FakeCamera(open_error=CameraNotFoundError("/dev/video0"))
        session, _ = make_session(ScriptedProvider([]), camera=camera)
        with self.assertRaises(CameraNotFoundError):
            await session.start()
        await session.stop()

    async def test_read_failure_surfaces_from_next_frame(self):
        camera = FakeCamera(fail_after=0)
        session, _ = make_session(ScriptedProvider([]), camera=camera)
        await session.start()
        with self.assertRaises(CameraError):
            await session.next_frame()
        await session.stop()

    async def test_unexpected_read_failure_surfaces_as_camera_error(self):
        camera = BrokenCamera()
        session, _ = make_session(ScriptedProvider([]), camera=camera)
        await session.start()
        with self.assertLogs("emoji_mirror.session", level="ERROR"):
            with self.assertRaises(CameraError) as ctx:
                await asyncio.wait_for(session.next_frame(), 1.0)
        self.assertIn("bad frame buffer", ctx.exception.user_message())
        self.assertIsInstance(ctx.exception.__cause__, ValueError)
        await session.stop()

    async def test_stop_waits_for_in_flight_read(self):
        camera = SlowCamera()
        session, _ = make_session(ScriptedProvider([]), camera=camera)
        await session.start()
        self.assertTrue(await asyncio.to_thread(camera.reading.wait, 1.0))

        await session.stop()

        self.assertFalse(camera.closed_during_read)
        self.assertFalse(camera.in_read)
        self.assertFalse(camera.is_open)

    async def test_pause_waits_for_in_flight_read(self):
        camera = SlowCamera()
        session, _ = make_session(ScriptedProvider([]), camera=camera)
        await session.start()
        self.assertTrue(await asyncio.to_thread(camera.reading.wait, 1.0))

        await session.pause()

        self.assertFalse(camera.closed_during_read)
        self.assertFalse(session.slot.pending())
        await session.resume()
        self.assertIsNotNone(await session.next_frame())
        await session.stop()

    async def test_pause_and_resume(self):
        camera = FakeCamera()
        session, _ = make_session(ScriptedProvider([make_hand()]), camera=camera)

        await session.start()
        await session.next_frame()
        old_slot = session.slot

        await session.pause()
        self.assertTrue(session.paused)
        self.assertFalse(camera.is_open)
        with self.assertRaises(SlotClosed):
            await session.next_frame()

        await session.resume()
        self.assertFalse(session.paused)
        self.assertEqual(camera.open_count, 2)
        self.assertIsNot(session.slot, old_slot)
        self.assertIsNotNone(await session.next_frame())
        await session.stop()

    async def test_next_frame_before_start(self):
        session, _ = make_session(ScriptedProvider([]))
        with self.assertRaises(SlotClosed):
            await session.next_frame()


if __name__ == '__main__':
    unittest.main()
