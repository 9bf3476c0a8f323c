"""theshit — fix the shell command that just failed."""

__version__ = "0.1.0"
