"""Shared infrastructure: errors, logging and identity."""
