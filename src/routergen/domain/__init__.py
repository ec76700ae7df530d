"""Domain layer — dependency models, errors, and escaping rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
