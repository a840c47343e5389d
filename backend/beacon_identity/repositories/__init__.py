"""Repositories — SQL implementations of the core storage Protocols."""
