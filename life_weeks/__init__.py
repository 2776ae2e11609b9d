"""Life Weeks: your expected lifespan as a grid of weeks, with a live countdown."""

__version__ = "0.1.0"
