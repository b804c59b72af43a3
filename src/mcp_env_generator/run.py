import os
import uvicorn

from .main import app


def run_web_server():
    """Launches the Uvicorn web server."""
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", 8000)))


if __name__ == "__main__":
    run_web_server()
