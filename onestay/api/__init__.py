"""
HTTP API.

The application is built by onestay.api.app.create_app().
"""
