"""Statics image upload service."""
