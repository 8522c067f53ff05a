import os
import logging
from datetime import datetime
from uuid import uuid4

import requests
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g
from flask_cors import CORS

# --- Import our configuration and the proxy services ---
from config import Config
from delexi_proxy.settings import load_proxy_settings
from delexi_proxy.domain.credentials import AppTokenCache
from delexi_proxy.domain.catalog import PlaylistService
from delexi_proxy.interfaces.http.routes import playlist_bp, health_bp
from delexi_proxy.observability import configure_structured_logging, metrics_blueprint


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root (no extra console spam)

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(settings_overrides=None, http_session=None, clock=None):
    """Build the Flask app.

    ``settings_overrides`` is merged over the environment-derived settings;
    ``http_session`` replaces the requests session used for both upstream
    calls and ``clock`` the token cache's time source (tests inject both).
    """
    settings = load_proxy_settings(settings_overrides)

    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.update(
        {
            'SERVICE_NAME': 'delexi-proxy',
            'PORT': settings.port,
        }
    )
    app.extensions['proxy_settings'] = settings
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    CORS(app, resources={r"/api/*": {"origins": list(settings.cors_allowed_origins)}})

    if not settings.has_credentials:
        app.logger.warning(
            "Spotify client id or secret not configured; playlist requests will fail "
            "until SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET are set."
        )

    session = http_session or requests.Session()
    token_kwargs = {"clock": clock} if clock is not None else {}
    token_cache = AppTokenCache(
        settings.spotify_client_id,
        settings.spotify_client_secret,
        token_url=settings.token_url,
        session=session,
        timeout=settings.timeout_seconds,
        expiry_margin_seconds=settings.token_expiry_margin_seconds,
        **token_kwargs,
    )
    playlist_service = PlaylistService(
        token_cache,
        api_base_url=settings.api_base_url,
        default_market=settings.default_market,
        allowed_markets=settings.allowed_markets,
        forward_market=settings.forward_market,
        session=session,
        timeout=settings.timeout_seconds,
    )

    # Expose services for routes
    app.extensions['token_cache'] = token_cache
    app.extensions['playlist_service'] = playlist_service

    # --- Register Blueprints ---
    app.register_blueprint(playlist_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    # Configure logging:
    # - In debug with reloader: only in the child process to avoid duplicate files
    # - In non-debug: always configure here
    if not Config.DEBUG or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(Config.LOG_DIR)
        logger.info("File logging initialized at %s", log_file_path)

    app = create_app()
    # Route app.logger through root handlers, keep levels consistent
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    port = app.config['PORT']
    logger.info("Delexi proxy up on http://localhost:%s", port)
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=port, threaded=True)
