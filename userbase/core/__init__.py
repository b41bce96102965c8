"""
Core utilities shared across userbase.

This package hosts:
- configuration helpers (env vars, default root file, write behaviour)
- identifier/token generation
"""
