"""Navigateur de profils publics GitHub."""
