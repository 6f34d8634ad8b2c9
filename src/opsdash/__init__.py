"""opsdash — in-memory operations dashboard core for a services firm."""

__version__ = "0.1.0"
