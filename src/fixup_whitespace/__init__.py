"""Multi-cursor whitespace fixup for text buffers."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "fixup",
    "host",
    "runtime",
]

__version__ = "0.1.0"
