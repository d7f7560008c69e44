"""Chirp posting, listing and owner-only deletion."""
