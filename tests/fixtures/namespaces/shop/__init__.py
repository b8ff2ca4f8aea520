"""Sample service namespace covering every capability category."""
