"""Application layer for the provisioning context."""
