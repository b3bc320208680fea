"""Terminal habit tracker: a year-long completion calendar plus streaks."""

__version__ = "0.1.0"
