"""Command line interface for actpdf."""
