"""Domain layer for the provisioning context.

Pure business rules: lifecycle signals, the tenant account record, status
mapping tables and the transition rules. No I/O happens here.
"""
