"""
Core modules for Multi-API Translator.

This package contains the provider registry, the translation dispatcher,
the daily quota reset schedule, and the error hierarchy.
"""
