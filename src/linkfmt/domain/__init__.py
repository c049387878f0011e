"""Domain layer — link model, URIs, parsing and conversion rules.

This layer depends only on stdlib and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
