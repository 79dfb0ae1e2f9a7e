"""A vertical-scrolling space shooter on pygame with a saved high-score table."""

__version__ = "0.1.0"