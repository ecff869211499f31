"""jsmatch: compile pattern-matching expression trees to JavaScript."""

__version__ = "0.1.0"
