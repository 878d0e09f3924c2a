"""CLI layer for balanceit application."""
