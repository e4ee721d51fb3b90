"""Infrastructure layer — record file access.

This layer depends on stdlib and third-party libs (ruamel.yaml).
It must never import from domain, services, commands, or output.
"""
