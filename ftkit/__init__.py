"""Character, string, memory and linked-list helpers, a printf-style formatter, a line reader and a command pipeline runner."""

__version__ = "0.1.0"