"""Shared building blocks: logging, monitoring, database layer and schemas."""
