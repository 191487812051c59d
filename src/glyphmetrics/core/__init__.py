"""Shared building blocks: configuration, diagnostics, and errors."""
