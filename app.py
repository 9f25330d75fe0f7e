"""
Main application entry point
The application itself lives in backend/dbe_tracker/main.py
"""
from backend.dbe_tracker.main import app
from backend.dbe_tracker.core.config import settings
import uvicorn

if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
