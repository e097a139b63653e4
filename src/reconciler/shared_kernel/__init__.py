"""Shared Kernel module.

Foundational components that are explicitly shared across bounded contexts:
the inbound event envelope, resource identifier parsing and the observation
context carried by every domain probe.
"""
