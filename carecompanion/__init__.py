"""CareCompanion senior-care wellness API."""

__version__ = "0.1.0"
