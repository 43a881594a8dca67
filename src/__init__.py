"""pagebound: dated journal entries and the insight derived from them.

Entry lifecycle and per-day selection, tag and text indexes, writing
streaks, mood patterns, and guided multi-day writing programs.
"""

__version__ = "0.1.0"
