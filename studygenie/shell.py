"""Top-level application state and the commands that change it.

Views read ``Shell.state`` and call the command methods; nothing else writes
the state or the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from studygenie import gemini
from studygenie.errors import GenerationFailure
from studygenie.logging import get_logger
from studygenie.models import GenerationRequest, Preferences, StudyBundle
from studygenie.storage import LibraryStore
from studygenie.tutor import ImageCapture, SolveSession

logger = get_logger(__name__)


class View(str, Enum):
    CREATE = "create"
    SOLVE = "solve"
    SAVED = "saved"
    SETTINGS = "settings"


@dataclass
class AppState:
    active_view: View = View.CREATE
    bundle: Optional[StudyBundle] = None
    preferences: Preferences = field(default_factory=Preferences)
    library: list[StudyBundle] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None
    request_seq: int = 0
    capture: ImageCapture = field(default_factory=ImageCapture)
    solve: SolveSession = field(default_factory=SolveSession)


class Shell:
    def __init__(self, store: LibraryStore):
        self.store = store
        library, preferences = store.load()
        self.state = AppState(library=library, preferences=preferences)

    # --- navigation ---
    def navigate(self, view: View):
        self.state.bundle = None
        if view != self.state.active_view:
            self.state.capture.release()
        self.state.active_view = View(view)

    def open_bundle(self, bundle: StudyBundle):
        self.state.bundle = bundle

    def close_bundle(self):
        self.state.bundle = None

    @property
    def is_saved(self) -> bool:
        bundle = self.state.bundle
        return bundle is not None and any(b.id == bundle.id for b in self.state.library)

    # --- generation ---
    def begin_generation(self) -> int:
        self.state.request_seq += 1
        self.state.is_loading = True
        self.state.error = None
        self.state.bundle = None
        return self.state.request_seq

    def finish_generation(self, ticket: int, bundle: Optional[StudyBundle] = None, error: Optional[str] = None) -> bool:
        """Apply a generation result unless a newer request has started since."""
        if ticket != self.state.request_seq:
            logger.info("Discarding result of superseded request %d (latest is %d)", ticket, self.state.request_seq)
            return False
        self.state.is_loading = False
        self.state.bundle = bundle
        self.state.error = error
        return True

    def generate(self, request: GenerationRequest, create: Callable[..., StudyBundle] = gemini.create_study_bundle) -> Optional[StudyBundle]:
        ticket = self.begin_generation()
        try:
            bundle = create(request, self.state.preferences.custom_instruction)
        except GenerationFailure as e:
            self.finish_generation(ticket, error=str(e) or gemini.GENERIC_FAILURE)
            return None
        except BaseException:
            # Streamlit interrupts the script on rerun; never leave the flag set
            if ticket == self.state.request_seq:
                self.state.is_loading = False
            raise
        self.finish_generation(ticket, bundle=bundle)
        return bundle

    # --- library ---
    def save_current(self) -> bool:
        if self.state.bundle is None:
            return False
        saved = self.store.save(self.state.bundle)
        self.state.library = self.store.library
        return saved

    def delete(self, bundle_id: str) -> bool:
        deleted = self.store.delete(bundle_id)
        self.state.library = self.store.library
        return deleted

    # --- settings ---
    def update_preferences(self, preferences: Preferences):
        self.state.preferences = preferences
        self.store.save_preferences(preferences)
        self.navigate(View.CREATE)
