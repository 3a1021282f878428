"""API blueprints, one per resource collection."""
