"""NLU Export - compile conversation boards into NLU agent import archives."""

__version__ = "1.0.0"
