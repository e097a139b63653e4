"""Inbound event normalization."""
