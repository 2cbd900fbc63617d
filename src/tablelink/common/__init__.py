"""Shared errors, logging and settings."""
