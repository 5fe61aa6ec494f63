"""Order-management core for a retail furniture point of sale."""

__version__ = "0.1.0"
