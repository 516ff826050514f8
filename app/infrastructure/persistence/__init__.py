"""Persistence adapters: table models, mappers and repositories."""
