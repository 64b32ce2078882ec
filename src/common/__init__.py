"""Shared helpers: logging and the lenient JSON reader."""
