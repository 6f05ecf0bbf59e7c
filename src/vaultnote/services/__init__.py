"""Service layer: the note generation pipeline and its registries.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
