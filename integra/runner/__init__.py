"""
integra.runner - Process bootstrap

Run with ``python -m integra.runner`` or the ``integra`` console script.
"""
