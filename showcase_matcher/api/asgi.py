"""
ASGI entry point.

    uvicorn showcase_matcher.api.asgi:app --host 0.0.0.0 --port 8000
"""

from showcase_matcher.api.main import create_app

app = create_app()
