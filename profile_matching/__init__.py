"""Profile Matching: gap-based multi-criteria scoring and ranking."""

__version__ = "0.1.0"
