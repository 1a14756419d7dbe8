"""Shared models, exceptions and helpers for actpdf."""
