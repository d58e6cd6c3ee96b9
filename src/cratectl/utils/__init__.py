"""Shared utilities — constants and logging setup.

Rules
-----
* No business logic.
* Importable by any layer.
"""
