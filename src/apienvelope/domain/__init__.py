"""Domain layer — protocol types, service descriptors, and error models.

This layer depends only on stdlib and pydantic.
It must never import from codec, config, or service.
"""
