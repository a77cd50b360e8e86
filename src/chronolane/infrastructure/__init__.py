"""Infrastructure layer — dataset files on disk.

This layer depends on stdlib and third-party parsers (ruamel.yaml).
It may import domain models; it must never import services, commands, or output.
"""
