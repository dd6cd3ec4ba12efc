"""commitclock — live "time since last commit" counter for the terminal."""

__version__ = "0.1.0"
