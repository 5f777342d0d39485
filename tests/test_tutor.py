import io

import pytest
from PIL import Image

from studygenie.errors import CaptureFailure, GenerationFailure
from studygenie.tutor import CapturePhase, ImageCapture, SolvePhase, SolveSession, camera_session, to_jpeg


def png_bytes(color="red", mode="RGBA"):
    buffer = io.BytesIO()
    Image.new(mode, (8, 8), color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_to_jpeg_reencodes_png():
    data = to_jpeg(png_bytes())
    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "JPEG"
        assert image.mode == "RGB"


@pytest.mark.parametrize("data", [b"", b"definitely not an image"])
def test_to_jpeg_rejects_garbage(data):
    with pytest.raises(CaptureFailure):
        to_jpeg(data)


def test_camera_still_releases_camera():
    capture = ImageCapture()
    assert capture.phase == CapturePhase.IDLE

    capture.start_camera()
    assert capture.phase == CapturePhase.CAPTURING

    capture.take_still(png_bytes())
    assert not capture.camera_active
    assert capture.phase == CapturePhase.READY

    capture.clear()
    assert capture.phase == CapturePhase.IDLE
    assert capture.image is None


def test_bad_frame_still_releases_camera():
    capture = ImageCapture()
    capture.start_camera()
    with pytest.raises(CaptureFailure):
        capture.take_still(b"junk")
    assert not capture.camera_active
    assert capture.image is None


def test_still_without_camera_is_rejected():
    with pytest.raises(CaptureFailure):
        ImageCapture().take_still(png_bytes())


def test_cancel_keeps_previous_image():
    capture = ImageCapture()
    capture.upload(png_bytes())
    capture.start_camera()
    capture.cancel()
    assert capture.phase == CapturePhase.READY


def test_upload_replaces_image_and_stops_camera():
    capture = ImageCapture()
    capture.upload(png_bytes("red"))
    first = capture.image
    capture.start_camera()
    capture.upload(png_bytes("blue"))
    assert not capture.camera_active
    assert capture.image != first


def test_camera_session_releases_on_error():
    capture = ImageCapture()
    capture.start_camera()
    with pytest.raises(RuntimeError):
        with camera_session(capture):
            raise RuntimeError("render failed")
    assert not capture.camera_active


def test_camera_session_keeps_camera_on_clean_exit():
    capture = ImageCapture()
    capture.start_camera()
    with camera_session(capture):
        pass
    assert capture.camera_active


@pytest.mark.parametrize(
    "text, has_image, expected",
    [("", False, False), ("   ", False, False), ("What is 2+2?", False, True), ("", True, True)],
)
def test_can_submit(text, has_image, expected):
    assert SolveSession.can_submit(text, has_image) is expected


def test_submit_success():
    session = SolveSession()
    seen = {}

    def solve(**kwargs):
        seen.update(kwargs)
        assert session.busy
        return "Answer"

    assert session.submit(solve, question_text="Q") == "Answer"
    assert session.phase == SolvePhase.ANSWERED
    assert session.answer == "Answer"
    assert seen == {"question_text": "Q"}


def test_submit_failure_returns_to_idle():
    session = SolveSession()
    session.submit(lambda **_: "Old answer")

    def fail(**_):
        raise GenerationFailure("nope")

    with pytest.raises(GenerationFailure):
        session.submit(fail)
    assert session.phase == SolvePhase.IDLE
    assert session.answer is None
