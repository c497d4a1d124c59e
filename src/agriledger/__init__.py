"""agriledger — registry for agricultural sensor-data submissions."""

__version__ = "0.1.0"
