"""Domain layer — field models, resolution rules, and directive synthesis.

This layer depends only on stdlib and pydantic.
It must never import from services, plugins, commands, or config.
"""
