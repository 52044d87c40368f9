"""
Flask extension setup.

Extensions are initialized via init_extensions(app) from the app factory.
"""

import logging

from flask_cors import CORS

from config.settings import get_settings

logger = logging.getLogger(__name__)


def init_extensions(app):
    """Initialize all Flask extensions with the app instance.

    Args:
        app: Flask application instance
    """
    # CORS
    allowed_origins = get_settings().cors.origin_list
    CORS(app, origins=allowed_origins, supports_credentials=True)
    logger.debug(f"CORS enabled for: {', '.join(allowed_origins)}")
