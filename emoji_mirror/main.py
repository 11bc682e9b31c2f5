"""
Main application for the gesture and expression emoji demos.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import cv2
import numpy as np

from .camera import Camera
from .channel import SlotClosed
from .config import Cfg, load_config
from .display import DisplayUpdater, MockDisplay
from .errors import CameraError
from .expressions import classify_expression
from .gestures import GestureClassifier
from .labels import EXPRESSIONS, GESTURES
from .overlay import OverlayDisplay
from .session import Session
from .trackers import FaceMeshTracker, HandsTracker

logger = logging.getLogger(__name__)

MODES = ("hands", "face")


def build_session(config: Cfg, mode: str, display) -> Session:
    """Wire camera, tracker, classifier and display updater for one mode."""
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")

    camera = Camera(config.camera, mirror=config.display.mirror)
    if mode == "hands":
        tracker = HandsTracker.from_config(config.hands)
        classify = GestureClassifier(config.gestures).classify
    else:
        tracker = FaceMeshTracker.from_config(config.face_mesh)
        classify = classify_expression

    return Session(
        mode=mode,
        source=camera,
        provider=tracker,
        classify=classify,
        updater=DisplayUpdater(display),
    )


class EmojiMirrorApp:
    """Main application class: runs one demo, with pause/resume and retry."""

    def __init__(self, mode: str = "hands", config_path: Optional[str] = None,
                 headless: bool = False, max_frames: Optional[int] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.mode = mode
        self.headless = headless
        self.max_frames = max_frames
        self.window_name = f"{self.config.display.window_name} ({mode})"

        if headless:
            self.display = MockDisplay()
        else:
            self.display = OverlayDisplay(show_confidence=(mode == "face"))

        self.session: Optional[Session] = None

    async def run(self) -> None:
        """Run until the user quits. Camera failures offer a manual retry."""
        logger.info("Starting %s", self.window_name)
        while True:
            self.session = build_session(self.config, self.mode, self.display)
            try:
                await self.session.start()
                outcome = await self._run_session(self.session)
            except CameraError as e:
                logger.error("❌ %s", e.user_message())
                self.display.show_error(e.user_message())
                outcome = await self._wait_for_retry()
            finally:
                await self.session.stop()
                self.session.provider.close()

            if outcome != "retry":
                break

            logger.info("🔁 Retrying camera initialization")
            if isinstance(self.display, OverlayDisplay):
                self.display.clear_error()

        if not self.headless:
            cv2.destroyAllWindows()

    async def _run_session(self, session: Session) -> str:
        """Consume frames until quit. Returns "quit"."""
        while True:
            try:
                frame = await session.next_frame()
            except SlotClosed:
                return "quit"

            label, landmark_sets = session.process_frame(frame)

            if self.max_frames is not None and session.frames_processed >= self.max_frames:
                return "quit"
            if self.headless:
                continue

            self._render(session, frame, landmark_sets)
            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                return "quit"
            if key == ord('p'):
                await session.pause()
                if not await self._wait_while_paused():
                    return "quit"
                await session.resume()

    def _render(self, session: Session, frame: np.ndarray, landmark_sets: List) -> None:
        if self.config.display.show_landmarks and landmark_sets:
            session.provider.draw(frame, landmark_sets)
        self.display.render(frame)
        cv2.putText(frame, "p: pause  q: quit", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1)
        cv2.imshow(self.window_name, frame)

    async def _wait_while_paused(self) -> bool:
        """Block until 'p' resumes (True) or 'q' quits (False)."""
        paused = np.zeros((self.config.camera.height, self.config.camera.width, 3), dtype=np.uint8)
        cv2.putText(paused, "Paused - press 'p' to resume", (20, self.config.camera.height // 2),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 255, 255), 2)
        cv2.imshow(self.window_name, paused)
        while True:
            key = cv2.waitKey(50) & 0xFF
            if key == ord('p'):
                return True
            if key == ord('q'):
                return False
            await asyncio.sleep(0)

    async def _wait_for_retry(self) -> str:
        """Show the error and wait for a retry or quit decision."""
        if self.headless:
            try:
                answer = await asyncio.to_thread(input, "Press Enter to retry or 'q' to quit: ")
            except EOFError:
                # stdin closed or redirected: nobody can answer
                return "quit"
            return "quit" if answer.strip().lower() == "q" else "retry"

        frame = np.zeros((self.config.camera.height, self.config.camera.width, 3), dtype=np.uint8)
        self.display.render_error(frame)
        cv2.imshow(self.window_name, frame)
        while True:
            key = cv2.waitKey(50) & 0xFF
            if key == ord('r'):
                return "retry"
            if key == ord('q'):
                return "quit"
            await asyncio.sleep(0)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="emoji-mirror",
        description="Show an emoji for the hand gesture or facial expression in front of the webcam."
    )
    parser.add_argument("--mode", choices=MODES, default="hands",
                        help="classify hand gestures or facial expressions")
    parser.add_argument("--config", default=None, help="path to a YAML config file")
    parser.add_argument("--headless", action="store_true",
                        help="no window; labels are only logged")
    parser.add_argument("--max-frames", type=int, default=None,
                        help="stop after this many classified frames")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    labels = GESTURES if args.mode == "hands" else EXPRESSIONS
    logger.info("Recognized labels: %s", ", ".join(
        f"{label.emoji} {label.name}" for key, label in labels.items() if key != "NONE"))

    try:
        app = EmojiMirrorApp(mode=args.mode, config_path=args.config,
                             headless=args.headless, max_frames=args.max_frames)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except (FileNotFoundError, ValueError) as e:
        logger.error("Configuration error: %s", e)
        return 1
    return 0


def cli() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")


if __name__ == "__main__":
    cli()
