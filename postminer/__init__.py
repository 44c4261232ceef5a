"""PostMiner: generic bulletin-board post extraction."""

__version__ = "0.1.0"
