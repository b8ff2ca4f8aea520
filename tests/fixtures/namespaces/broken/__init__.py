"""Namespace with a module that cannot be imported."""
