"""Domain layer: schema variants, interpreter, factories, member merge.

This layer depends only on the standard library.
It must never import from services, output, commands, or config.
"""
