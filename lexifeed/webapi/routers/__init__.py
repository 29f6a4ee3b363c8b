"""API routers grouped by area."""
