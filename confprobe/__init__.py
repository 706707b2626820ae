"""Configuration-option source instrumentation and configuration test sample designs."""

__version__ = "0.1.0"