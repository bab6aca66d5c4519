"""
Activations module - machines bound to licenses.

This module handles:
- Activation entity keyed by (app name, license key, machine id)
- Seat checks against a license's activation limit
- Activate, validate and deactivate with signed activation tokens
- Pending, approved and revoked rows with an audit log per change
"""
