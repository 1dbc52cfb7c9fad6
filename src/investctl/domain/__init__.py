"""Domain layer — the Investment model, its rules, and error codes.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
