"""Ports, reconcilers and accessors independent of concrete OS bindings."""
