"""HTTP surface over the workflow controller."""
