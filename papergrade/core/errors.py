"""Domain errors raised by the grading pipeline and persistence layer."""


class PapergradeError(Exception):
    """Base class for errors the HTTP layer knows how to translate."""


class ConfigurationError(PapergradeError):
    """A required setting (such as the Gemini API key) is missing."""


class ExtractionError(PapergradeError):
    """No usable result could be extracted from any uploaded page."""


class PersistenceError(PapergradeError):
    """A multi-row write failed and was rolled back."""
