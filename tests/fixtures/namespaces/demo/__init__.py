"""Minimal sample namespace."""
