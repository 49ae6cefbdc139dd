"""Building blocks of a small hobby kernel: graphics, input, terminal, shell, logging and memory."""

__version__ = "0.1.0"