"""
Core Package.

Unit data model, error kinds, configuration and logging setup.
"""
