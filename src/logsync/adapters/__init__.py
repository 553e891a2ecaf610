"""Adapters connecting the domain to wire formats and storage."""
