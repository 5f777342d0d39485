class StudyGenieError(Exception):
    """Base class for errors raised by StudyGenie."""


class GenerationFailure(StudyGenieError):
    """The Gemini call failed, or its output did not have the required shape."""


class CaptureFailure(StudyGenieError):
    """A camera still or uploaded file could not be turned into an image."""


class PersistenceCorruption(StudyGenieError):
    """A stored record could not be decoded. Never shown to the user."""
