"""Fair team assembly: stat scoring, quota planning and snake drafts."""

__version__ = "0.1.0"
