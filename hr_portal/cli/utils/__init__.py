"""CLI utilities package."""
