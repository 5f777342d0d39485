import streamlit as st

from studygenie.models import Theme

ACCENT = "#0EA5E9"

PALETTES = {
    Theme.DARK: {"bg": "#020617", "panel": "#0F172A", "text": "#F1F5F9", "muted": "#64748B", "border": "#1E293B"},
    Theme.LIGHT: {"bg": "#F8FAFC", "panel": "#FFFFFF", "text": "#0F172A", "muted": "#64748B", "border": "#E2E8F0"},
}


def apply_theme(theme):
    p = PALETTES[Theme(theme)]
    st.markdown(f"""
        <style>
            .stApp {{ background-color: {p['bg']}; color: {p['text']}; }}
            [data-testid='stSidebar'] {{ background-color: {ACCENT}; }}
            [data-testid='stSidebar'] * {{ color: #FFFFFF; }}
            .sg-title {{ font-size: 2.2rem; font-weight: 900; font-style: italic; text-transform: uppercase; letter-spacing: -0.05em; color: {p['text']}; margin-bottom: 0; }}
            .sg-badge {{ display: inline-block; padding: 0.1rem 0.5rem; border-radius: 4px; background: {ACCENT}; color: #FFFFFF; font-size: 0.65rem; font-weight: 900; letter-spacing: 0.1em; }}
            .sg-card {{ background: {p['panel']}; border: 1px solid {p['border']}; border-radius: 1rem; padding: 1.5rem; margin-bottom: 1rem; }}
            .sg-flashcard {{ min-height: 14rem; display: flex; flex-direction: column; justify-content: center; text-align: center; font-size: 1.4rem; font-weight: 700; }}
            .sg-muted {{ color: {p['muted']}; font-size: 0.85rem; }}
            .sg-blank {{ color: {ACCENT}; font-weight: 800; border-bottom: 2px solid {ACCENT}; padding: 0 0.4rem; }}
            .sg-option-correct {{ border-color: #22C55E; color: #22C55E; font-weight: 700; }}
            .sg-option-incorrect {{ border-color: #EF4444; color: #EF4444; }}
            .sg-option-muted {{ color: {p['muted']}; }}
        </style>
    """, unsafe_allow_html=True)


def header(show_back):
    """Title row; returns True when "Back to Home" is clicked."""
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown('<span class="sg-title">StudyGenie</span> <span class="sg-badge">AI</span>', unsafe_allow_html=True)
    with col2:
        if show_back:
            return st.button("Back to Home", key="back_home")
    return False
