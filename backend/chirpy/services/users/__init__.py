"""User account services: registration, credential updates, membership."""
