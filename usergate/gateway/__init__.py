"""Public HTTP gateway.

Authenticates requests, validates input and forwards work to the
authentication service through AuthServiceClient. Holds no user data.
"""

import logging

from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from ..auth.token import TokenIssuer
from ..config import Settings
from .client import AuthServiceClient
from .errors import register_error_handlers
from .middleware import init_request_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings, client: AuthServiceClient | None = None) -> Flask:
    """
    Build the gateway app.

    Args:
        settings: Application settings
        client: Optional service client; defaults to one built from settings

    Returns:
        Flask app with all public routes registered
    """
    from .auth import auth_bp
    from .health import health_bp
    from .users import users_bp

    app = Flask(__name__)

    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    app.extensions["token_issuer"] = TokenIssuer.from_settings(settings)
    app.extensions["auth_client"] = client or AuthServiceClient.from_settings(settings)

    init_request_logging(app)

    # Per client address and route, checked after the request id is assigned
    Limiter(
        get_remote_address,
        app=app,
        default_limits=[settings.rate_limit],
        storage_uri=settings.throttle_storage_uri,
    )

    register_error_handlers(app)

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(health_bp, url_prefix="/health")

    logger.info(f"Gateway forwarding to {settings.auth_service_url}")
    return app
