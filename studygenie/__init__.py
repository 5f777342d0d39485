"""StudyGenie: grade-aware study guides and tutoring answers powered by Gemini."""

__version__ = "0.1.0"
