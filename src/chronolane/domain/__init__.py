"""Domain layer — calendar math, items, scale, lane stacking, layout.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
