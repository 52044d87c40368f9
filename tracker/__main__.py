"""Development server entry point: python -m tracker"""

from config.settings import get_settings
from tracker.app import create_app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=get_settings().port)
