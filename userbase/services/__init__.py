"""
High-level use cases for userbase.

Service modules orchestrate the storage adapter, the rule validator and the
token generator. Callers use these services instead of touching the root file
directly.
"""
