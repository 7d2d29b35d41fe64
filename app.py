import os

from src.absence_registry.absence_registry.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "4000")), debug=bool(app.config.get("DEBUG")))
