"""
integra.api.endpoints - API Endpoint Routers
"""

from integra.api.endpoints import collaborators, process

__all__ = ["collaborators", "process"]
