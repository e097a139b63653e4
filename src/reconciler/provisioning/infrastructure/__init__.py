"""Infrastructure adapters for the provisioning context.

State store adapters (DynamoDB, in-memory), account directory adapters
(AWS Organizations, static) and the inbound event normalizer.
"""
