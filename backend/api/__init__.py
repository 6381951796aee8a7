"""
Users API package.

Provides the FastAPI application for the user and subscription service.
The application instance lives in api.app.
"""
