"""
Licenses module - license issuance and administration.

This module handles:
- License entity: seat limit, expiry, optional machine lock
- License key generation, unique within an app
- Status and limit edits, deletes with their activations
"""
