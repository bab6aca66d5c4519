"""
Django settings module.

This package contains environment-specific settings:
- base.py: Base settings shared across all environments
- env.py: Parsing of licensing environment variables
- logging.py: JSON logging configuration
- dev.py: Development environment settings
- test.py: Test environment settings
- prod.py: Production environment settings
"""
