"""Flutter clean-architecture scaffolding from sample JSON payloads."""

__version__ = "0.1.0"
