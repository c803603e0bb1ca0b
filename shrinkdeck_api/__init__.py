"""
Shrinkdeck API Flask Application
"""

import logging
import os

import redis
from flask import Flask, jsonify
from flask_cors import CORS

from shrinkdeck_core.errors import GameError

from .store import DEFAULT_MAX_RETRIES, DEFAULT_TTL, GameStore

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Configuration
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-secret-key")
    app.config["REDIS_URL"] = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    app.config["GAME_TTL_SECONDS"] = int(os.getenv("GAME_TTL_SECONDS", DEFAULT_TTL))
    app.config["GAME_MAX_RETRIES"] = int(os.getenv("GAME_MAX_RETRIES", DEFAULT_MAX_RETRIES))
    app.config["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO")
    app.config["REDIS_CLIENT"] = None

    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(app)

    # Initialize Redis
    redis_client = app.config["REDIS_CLIENT"] or redis.from_url(app.config["REDIS_URL"])
    app.extensions["game_store"] = GameStore(
        redis_client,
        ttl=app.config["GAME_TTL_SECONDS"],
        max_retries=app.config["GAME_MAX_RETRIES"],
    )

    # Register blueprints
    from .routes.game_routes import game_bp

    app.register_blueprint(game_bp, url_prefix="/api")

    @app.errorhandler(GameError)
    def handle_game_error(error):
        logger.info("Rejected (%s): %s", error.reason, error.message)
        return jsonify(error.to_dict()), error.status

    @app.errorhandler(redis.RedisError)
    def handle_storage_error(error):
        logger.exception("Game storage unavailable")
        return jsonify({"error": "Database connection failed", "reason": "STORAGE_UNAVAILABLE"}), 500

    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "healthy", "service": "shrinkdeck-api"}

    return app
