# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from stanblog.infrastructure.container import Container
from stanblog.shared.config import AppConfig, load_config
from stanblog.shared.logging import logger, setup_logging
from stanblog.shared.middleware.error_handler import configure_error_handling
from stanblog.shared.middleware.request_logger import configure_request_logging

CONTAINER_EXTENSION = "stanblog.container"


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(level=config.log_level, log_file=config.log_file)

    container = Container(config)
    container.database.init_schema()

    if config.token.ttl_seconds is None:
        logger.warning("Session tokens are issued without expiry (TOKEN_TTL_SECONDS unset)")

    app = Flask(__name__)
    app.extensions[CONTAINER_EXTENSION] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(app, origins=config.security.allowed_origins, supports_credentials=True)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.post_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    logger.info(f"Server is running on port {config.port}")
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
