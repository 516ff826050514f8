"""Adapters implementing the domain interfaces."""
