"""
Catalog module - the apps that licenses are issued for.

This module handles:
- App entity and identifier resolution (name, slug, compact form)
- App repository (port) and Django ORM adapter
- Renames and deletes that cascade to licenses and activations
"""
