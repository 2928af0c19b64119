"""Run the attendance registry API: ``python app.py`` (settings from APP_ENV / .env)."""
import os

from src.attendance_registry.attendance_registry.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config.get("DEBUG", False))
