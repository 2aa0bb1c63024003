"""Utility modules for tzresolver."""
