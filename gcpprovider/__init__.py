"""API types, serialization, configuration loading and validation for a GCP infrastructure provider."""

__version__ = "0.1.0"