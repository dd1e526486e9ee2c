"""Domain enums and API input/output models."""
