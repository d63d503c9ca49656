"""Shared utilities: logging setup and locked file output."""
