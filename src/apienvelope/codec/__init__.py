"""Codec layer — JSON serialization, envelope framing, and error translation.

Codecs may import from the domain layer.
They must never import from config or service.
"""
