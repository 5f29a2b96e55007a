"""Main application entry point for the FastAPI application.

Run with ``uvicorn panel_auth.main:app``.
"""

from panel_auth.core.application import create_application
from panel_auth.core.initialization import initialize_application

initialize_application()

app = create_application()
