"""
Persistence adapters.

Services depend on these helpers rather than touching the JSON file directly.
"""
