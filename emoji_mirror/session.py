"""
Session state for one running demo and the capture -> classify pipeline.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from .channel import FrameSlot, SlotClosed
from .display import DisplayUpdater
from .errors import CameraError
from .types import Label, Landmark

logger = logging.getLogger(__name__)

Classifier = Callable[[Sequence[List[Landmark]]], Label]


class FrameSource(Protocol):
    """Anything that can hand out frames, e.g. Camera."""

    is_open: bool

    def open(self) -> None: ...

    def read(self) -> Any: ...

    def close(self) -> None: ...


class LandmarkProvider(Protocol):
    """Anything that turns a frame into landmark sets, e.g. HandsTracker."""

    def process(self, frame: Any) -> List[List[Landmark]]: ...


@dataclass
class Session:
    """
    Everything one demo run owns: the frame source, the landmark provider,
    the classifier and the display state.
    """
    mode: str
    source: FrameSource
    provider: LandmarkProvider
    classify: Classifier
    updater: DisplayUpdater
    slot: Optional[FrameSlot] = None
    paused: bool = False
    frames_processed: int = 0
    error: Optional[CameraError] = None
    _capture_task: Optional[asyncio.Task] = field(default=None, repr=False)
    _stop_requested: Optional[asyncio.Event] = field(default=None, repr=False)

    def process_frame(self, frame: Any) -> Tuple[Label, List[List[Landmark]]]:
        """
        Classify one frame and update the display.

        Returns:
            The label for this frame and the landmark sets it was computed from
        """
        landmark_sets = self.provider.process(frame)
        label = self.classify(landmark_sets)
        self.updater.update(label)
        self.frames_processed += 1
        return label, landmark_sets

    async def start(self) -> None:
        """
        Open the source and start pushing frames into a fresh slot.

        Raises:
            CameraError: the source could not be opened
        """
        self.error = None
        self.source.open()
        self.slot = FrameSlot()
        self.paused = False
        self._stop_requested = asyncio.Event()
        self._capture_task = asyncio.create_task(
            self._capture_loop(self.slot, self._stop_requested))
        logger.info("▶️  %s session started", self.mode)

    async def _capture_loop(self, slot: FrameSlot, stop_requested: asyncio.Event) -> None:
        # Exits between reads so the source is never closed under a running read()
        try:
            while not stop_requested.is_set():
                frame = await asyncio.to_thread(self.source.read)
                if stop_requested.is_set():
                    break
                slot.put(frame)
                await asyncio.sleep(0)
        except CameraError as e:
            self.error = e
        except Exception as e:
            logger.exception("Capture failed")
            self.error = CameraError(str(e) or type(e).__name__)
            self.error.__cause__ = e
        finally:
            slot.close()

    async def next_frame(self) -> Any:
        """
        Wait for the newest captured frame.

        Raises:
            CameraError: the capture task failed
            SlotClosed: the session was paused or stopped
        """
        if self.slot is None:
            raise SlotClosed("session not started")
        try:
            return await self.slot.get()
        except SlotClosed:
            if self.error is not None:
                raise self.error
            raise

    async def _stop_capture(self) -> None:
        if self._capture_task is not None:
            self._stop_requested.set()
            # Wait for the in-flight read to return before releasing the source
            await self._capture_task
            self._capture_task = None
        if self.slot is not None:
            self.slot.clear()
            self.slot.close()
        self.source.close()

    async def pause(self) -> None:
        """Stop capturing. Nothing is classified until resume()."""
        if self.paused:
            return
        await self._stop_capture()
        self.paused = True
        logger.info("⏸️  %s session paused", self.mode)

    async def resume(self) -> None:
        """Restart capture with an empty slot."""
        if not self.paused:
            return
        await self.start()

    async def stop(self) -> None:
        await self._stop_capture()
        logger.info("⏹️  %s session stopped after %d frames", self.mode, self.frames_processed)
