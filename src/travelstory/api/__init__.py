"""FastAPI application and REST API endpoints.

This module contains:
- Main FastAPI application configuration
- Bearer-token session guard
- Travel story endpoints
- Image upload endpoints
"""
