"""Routes package - Flask blueprints."""
