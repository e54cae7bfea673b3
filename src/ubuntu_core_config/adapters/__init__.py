"""Concrete bindings for the application ports."""
