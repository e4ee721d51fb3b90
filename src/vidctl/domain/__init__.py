"""Domain layer — record model, field types, aspect table, completion rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
