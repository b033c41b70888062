"""Evidence Report - document composition and pagination engine for evidence reports."""

__version__ = "1.0.0"
