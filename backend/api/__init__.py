"""
Willerspace API package.

Provides the FastAPI application for Willerspace. The application
object lives in api.app (served as "api.app:app").
"""
