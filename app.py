"""WSGI entry point: `flask --app app run` or `gunicorn app:app`."""
from src.church_admin.church_admin.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG")))
