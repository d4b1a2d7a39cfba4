"""
integra.api - HTTP surface

FastAPI application exposing the orchestration endpoint, the simulated
collaborator services and a health check.
"""
