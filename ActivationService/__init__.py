"""
License Activation Service Django project.
"""
