import streamlit as st

from studygenie import config, gemini
from studygenie.errors import CaptureFailure, GenerationFailure
from studygenie.models import GRADES, Subject
from studygenie.tutor import CapturePhase, camera_session

CAPTURE_ERROR_KEY = "capture_error"


def _widget_key(name):
    # Bumping the counter gives Streamlit a fresh, empty widget
    return f"{name}_{st.session_state.get(f'{name}_gen', 0)}"


def _reset_widget(name):
    st.session_state[f"{name}_gen"] = st.session_state.get(f"{name}_gen", 0) + 1


def _stash_capture_error(message):
    # Shown on the next run; st.rerun() would discard an alert drawn now
    st.session_state[CAPTURE_ERROR_KEY] = message


def show_image_controls(capture):
    message = st.session_state.pop(CAPTURE_ERROR_KEY, None)
    if message:
        st.error(message)

    if capture.phase == CapturePhase.CAPTURING:
        with camera_session(capture):
            frame = st.camera_input("Point at your problem...", key=_widget_key("camera"))
            if frame is not None:
                try:
                    capture.take_still(frame.getvalue())
                except CaptureFailure as e:
                    _stash_capture_error(f"Could not access camera. {e}")
                _reset_widget("camera")
                st.rerun()
            if st.button("Cancel camera", key="camera_cancel"):
                capture.cancel()
                st.rerun()
        return

    col1, col2 = st.columns(2)
    with col1:
        if st.button("📷 Camera", key="camera_start", use_container_width=True):
            capture.start_camera()
            st.rerun()
    with col2:
        uploaded = st.file_uploader(
            "Upload", type=["png", "jpg", "jpeg", "webp"], key=_widget_key("upload"), label_visibility="collapsed"
        )
        if uploaded is not None:
            try:
                capture.upload(uploaded.getvalue())
            except CaptureFailure as e:
                _stash_capture_error(str(e))
            _reset_widget("upload")
            st.rerun()

    if capture.image is not None:
        st.image(capture.image, caption="Attached image", width=320)
        if st.button("Remove image", key="image_clear"):
            capture.clear()
            st.rerun()


def show_solve_view(shell):
    st.header("Deepmind")
    capture, session = shell.state.capture, shell.state.solve

    col1, col2 = st.columns(2)
    with col1:
        subject = st.selectbox(
            "Subject", list(Subject), index=list(Subject).index(Subject.SCIENCE), format_func=lambda s: s.value, key="solve_subject"
        )
    with col2:
        grade = st.selectbox("Grade", GRADES, index=4, format_func=lambda g: f"Grade {g}", key="solve_grade")

    question = st.text_area(
        "Your question",
        key="solve_question",
        height=160,
        placeholder="Type your question, paste text from a book, or describe a problem...",
    )
    show_image_controls(capture)

    ready = session.can_submit(question, capture.image is not None)
    label = "Thinking..." if session.busy else "Get Deep Answer"
    if st.button(label, type="primary", disabled=session.busy or not ready, use_container_width=True):
        with st.spinner("Thinking..."):
            try:
                session.submit(
                    gemini.solve_question,
                    subject=subject,
                    grade=grade,
                    question_text=question,
                    image_bytes=capture.image,
                    custom_instruction=shell.state.preferences.custom_instruction,
                )
            except GenerationFailure as e:
                st.error(f"Failed to solve the question. Try again. ({e})")

    if session.answer:
        st.subheader("AI Tutor Analysis")
        st.markdown(session.answer)
        st.caption(f"Powered by {config.model_name()}")
