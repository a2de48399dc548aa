"""Domain layer — rules, markers, property types and configurations.

This layer depends only on stdlib, pydantic and annotated-types.
It must never import from services, infrastructure, commands, or config.
"""
