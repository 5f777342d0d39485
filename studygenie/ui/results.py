import html

import streamlit as st
import streamlit.components.v1 as components

from studygenie.export import printable_summary, to_transcript, transcript_filename
from studygenie.practice import BundleViewState, OptionStatus, Tab

TAB_LABELS = {Tab.SUMMARY: "Summary", Tab.FLASHCARDS: "Flashcards", Tab.PRACTICE: "Practice"}
VIEW_STATE_KEY = "bundle_view"


def _view_state(bundle):
    """Interaction state for ``bundle``; rebuilt whenever the bundle changes."""
    view = st.session_state.get(VIEW_STATE_KEY)
    if view is None or not view.matches(bundle):
        view = BundleViewState.for_bundle(bundle)
        st.session_state[VIEW_STATE_KEY] = view
    return view


def forget_view_state():
    st.session_state.pop(VIEW_STATE_KEY, None)


def show_results(shell):
    bundle = shell.state.bundle
    view = _view_state(bundle)

    col_download, col_print, col_save = st.columns(3)
    with col_download:
        st.download_button(
            "Export Text",
            to_transcript(bundle),
            file_name=transcript_filename(bundle.topic),
            mime="text/plain",
            use_container_width=True,
        )
    with col_print:
        if st.button("Print", key="print_summary", use_container_width=True):
            components.html(printable_summary(bundle), height=0)
    with col_save:
        saved = shell.is_saved
        if st.button("Saved" if saved else "Save", key="save_bundle", type="primary", disabled=saved, use_container_width=True):
            shell.save_current()
            st.rerun()

    st.caption(f"{bundle.subject.value} · Grade {bundle.grade}")
    st.title(bundle.topic)

    tab = st.radio(
        "Section",
        list(Tab),
        index=list(Tab).index(view.tab),
        format_func=TAB_LABELS.get,
        horizontal=True,
        label_visibility="collapsed",
        key=f"tab_{bundle.id}",
    )
    view.tab = Tab(tab)
    st.divider()

    if view.tab == Tab.SUMMARY:
        show_summary(bundle)
    elif view.tab == Tab.FLASHCARDS:
        show_flashcards(bundle, view.deck)
    else:
        show_practice(bundle, view)


def show_summary(bundle):
    st.subheader("Key Concepts")
    st.markdown(bundle.summary)


def show_flashcards(bundle, deck):
    card = bundle.flashcards[deck.index]
    side = card.back if deck.flipped else card.front
    hint = ""
    if deck.flipped and card.explanation:
        hint = f'<div class="sg-muted" style="margin-top:1rem;">{html.escape(card.explanation)}</div>'
    label = "Answer" if deck.flipped else "Question"
    st.markdown(
        f'<div class="sg-card sg-flashcard"><div class="sg-muted">{label}</div>'
        f"<div>{html.escape(side)}</div>{hint}</div>",
        unsafe_allow_html=True,
    )

    col1, col2, col3, col4 = st.columns([1, 1, 1, 1])
    if col1.button("Previous", key="card_prev", use_container_width=True):
        deck.previous()
        st.rerun()
    if col2.button("Flip", key="card_flip", use_container_width=True):
        deck.flip()
        st.rerun()
    if col3.button("Next", key="card_next", use_container_width=True):
        deck.next()
        st.rerun()
    col4.markdown(f"**{deck.index + 1} / {deck.count}**")


def show_practice(bundle, view):
    st.subheader("Fill in the Blanks")
    for i, (item, state) in enumerate(zip(bundle.fill_in_the_blanks, view.blanks)):
        before, after = item.parts()
        answer = html.escape(item.answer) if state.revealed else "?"
        st.markdown(
            f'{i + 1}. {html.escape(before)}<span class="sg-blank">{answer}</span>{html.escape(after)}',
            unsafe_allow_html=True,
        )
        if st.button("Hide Answer" if state.revealed else "Reveal Answer", key=f"blank_{i}"):
            state.toggle()
            st.rerun()

    st.subheader("True or False")
    for i, (q, state) in enumerate(zip(bundle.true_false, view.true_false)):
        with st.container(border=True):
            st.markdown(q.statement)
            if not state.answered:
                col1, col2 = st.columns(2)
                if col1.button("True", key=f"tf_{i}_true", use_container_width=True):
                    state.answer(True)
                    st.rerun()
                if col2.button("False", key=f"tf_{i}_false", use_container_width=True):
                    state.answer(False)
                    st.rerun()
            else:
                if state.is_correct:
                    st.success(f"Brilliant! {q.explanation}")
                else:
                    st.error(f"Not quite. {q.explanation}")
                if st.button("Try again", key=f"tf_{i}_reset"):
                    state.reset()
                    st.rerun()

    st.subheader("Scenario Challenges")
    for i, (s, state) in enumerate(zip(bundle.scenarios, view.scenarios)):
        with st.container(border=True):
            st.markdown(f"*{s.scenario}*")
            st.markdown(f"**{s.question}**")
            for j, option in enumerate(s.options):
                status = state.option_status(j)
                if status == OptionStatus.IDLE:
                    if st.button(option, key=f"sc_{i}_{j}", use_container_width=True):
                        state.select(j)
                        st.rerun()
                else:
                    mark = {OptionStatus.CORRECT: "✅ ", OptionStatus.INCORRECT: "❌ "}.get(status, "")
                    st.markdown(
                        f'<div class="sg-card sg-option-{status.value}" style="padding:0.6rem 1rem;margin-bottom:0.4rem;">'
                        f"{mark}{html.escape(option)}</div>",
                        unsafe_allow_html=True,
                    )
            if state.answered:
                st.info(s.explanation)
