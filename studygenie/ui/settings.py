import streamlit as st

from studygenie.models import Preferences, Theme


def show_settings_view(shell):
    st.header("App Settings")
    current = shell.state.preferences

    theme = st.radio(
        "Appearance",
        list(Theme),
        index=list(Theme).index(current.theme),
        format_func=lambda t: t.value.title(),
        horizontal=True,
    )
    st.subheader("AI Behavior")
    st.caption("Add custom instructions to influence how the AI generates content or solves questions.")
    instruction = st.text_area(
        "Custom instructions",
        value=current.custom_instruction,
        height=150,
        placeholder="e.g. Always include a joke, use simpler language, or focus on real-world engineering examples...",
    )
    st.caption("These instructions will be appended to every request made to the Gemini model.")

    if st.button("Save Settings", key="settings_save", type="primary"):
        shell.update_preferences(Preferences(theme=theme, custom_instruction=instruction))
        st.rerun()
