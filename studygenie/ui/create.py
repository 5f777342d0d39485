import streamlit as st
from pydantic import ValidationError

from studygenie.config import DEFAULT_PUBLISHER
from studygenie.models import GRADES, GenerationRequest, Subject


def show_create_view(shell):
    st.markdown("## The Ultimate **Study Guide** Generator.")
    st.caption("Skip the reading. Get the knowledge.")

    with st.form("generate_form"):
        topic = st.text_input("Topic", key="create_topic", placeholder="e.g. Photosynthesis, Fractions, The Water Cycle")
        col1, col2 = st.columns(2)
        with col1:
            subject = st.selectbox("Subject", list(Subject), format_func=lambda s: s.value)
        with col2:
            grade = st.selectbox("Grade", GRADES, index=4, format_func=lambda g: f"Grade {g}")
        publisher = st.text_input("Publisher", value=DEFAULT_PUBLISHER)
        label = "Generating..." if shell.state.is_loading else "Generate Study Guide"
        submitted = st.form_submit_button(label, type="primary", disabled=shell.state.is_loading)

    if submitted:
        try:
            request = GenerationRequest(topic=topic, grade=grade, subject=subject, publisher=publisher.strip())
        except ValidationError:
            st.warning("Please enter a topic to study.")
            return
        with st.spinner(f"Building your {subject.value} guide on {request.topic}..."):
            bundle = shell.generate(request)
        if bundle is not None:
            st.rerun()

    if shell.state.error:
        st.error(shell.state.error)
