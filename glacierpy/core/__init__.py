"""Core modules for glacierpy."""
