"""Image capture and solve state for the Deepmind tutor."""

from __future__ import annotations

import io
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Optional

from PIL import Image, UnidentifiedImageError

from studygenie.errors import CaptureFailure, GenerationFailure
from studygenie.logging import get_logger

logger = get_logger(__name__)

JPEG_QUALITY = 90


def to_jpeg(data: bytes) -> bytes:
    """Re-encode any Pillow-readable image as an RGB JPEG."""
    if not data:
        raise CaptureFailure("The image is empty.")
    try:
        with Image.open(io.BytesIO(data)) as image:
            buffer = io.BytesIO()
            image.convert("RGB").save(buffer, format="JPEG", quality=JPEG_QUALITY)
    except (UnidentifiedImageError, OSError) as e:
        raise CaptureFailure(f"Could not read the image: {e}") from e
    return buffer.getvalue()


class CapturePhase(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    READY = "ready"


class ImageCapture:
    """Holds at most one image and at most one live camera session."""

    def __init__(self):
        self.camera_active = False
        self.image: Optional[bytes] = None

    @property
    def phase(self) -> CapturePhase:
        if self.camera_active:
            return CapturePhase.CAPTURING
        if self.image is not None:
            return CapturePhase.READY
        return CapturePhase.IDLE

    def start_camera(self):
        self.camera_active = True

    def release(self):
        if self.camera_active:
            logger.debug("Camera released")
        self.camera_active = False

    def take_still(self, frame: bytes):
        """Keep one frame from the live camera, then release the camera."""
        try:
            if not self.camera_active:
                raise CaptureFailure("The camera is not running.")
            self.image = to_jpeg(frame)
        finally:
            self.release()

    def cancel(self):
        self.release()

    def upload(self, data: bytes):
        self.release()
        self.image = to_jpeg(data)

    def clear(self):
        self.release()
        self.image = None


@contextmanager
def camera_session(capture: ImageCapture):
    """Release the camera if rendering the live view fails part-way.

    Only errors release it; Streamlit's rerun and stop signals pass through
    untouched so a live session survives reruns.
    """
    try:
        yield capture
    except Exception:
        capture.release()
        raise


class SolvePhase(str, Enum):
    IDLE = "idle"
    SOLVING = "solving"
    ANSWERED = "answered"


class SolveSession:
    def __init__(self):
        self.phase = SolvePhase.IDLE
        self.answer: Optional[str] = None

    @staticmethod
    def can_submit(question_text: str, has_image: bool) -> bool:
        return bool((question_text or "").strip()) or has_image

    @property
    def busy(self):
        return self.phase == SolvePhase.SOLVING

    def submit(self, solve: Callable[..., str], **kwargs) -> str:
        self.phase = SolvePhase.SOLVING
        self.answer = None
        try:
            answer = solve(**kwargs)
        except GenerationFailure:
            self.phase = SolvePhase.IDLE
            raise
        self.answer = answer
        self.phase = SolvePhase.ANSWERED
        return answer
