"""HTTP adapter for the festival workflow."""
