"""
Configuration loading for the OPM repository.

This package is responsible for:
* Determining the package store root (via env var + sensible default).
* Loading optional repository-level settings from repository.json.
"""
