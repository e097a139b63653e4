"""Provisioning bounded context.

Tracks each tenant's cloud account through provisioning request, account
creation and cross-account role deployment, reconciling upstream lifecycle
events into one persistent record per tenant and environment.
"""
