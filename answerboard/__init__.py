"""Q&A backend: candidate answers, votes, reputation and current-answer promotion."""

__version__ = "0.1.0"
