"""Entry points.

    usergate-service            # authentication service (internal)
    usergate-gateway            # public HTTP gateway
    python -m usergate.main gateway|service

Both processes read the same Settings (environment variables or .env).
"""

import argparse
import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Log to stderr, and to settings.log_file when set."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def run_service(settings: Settings | None = None) -> None:
    from .service import create_service_app

    settings = settings or Settings()
    configure_logging(settings)

    app = create_service_app(settings)
    logger.info(f"Authentication service listening on {settings.service_host}:{settings.service_port}")
    app.run(host=settings.service_host, port=settings.service_port)


def run_gateway(settings: Settings | None = None) -> None:
    from .gateway import create_app

    settings = settings or Settings()
    configure_logging(settings)

    app = create_app(settings)
    logger.info(f"Gateway listening on {settings.gateway_host}:{settings.gateway_port}")
    app.run(host=settings.gateway_host, port=settings.gateway_port)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="usergate", description="User registration and management")
    parser.add_argument("component", choices=["gateway", "service"], help="Process to run")
    args = parser.parse_args(argv)

    if args.component == "gateway":
        run_gateway()
    else:
        run_service()


if __name__ == "__main__":
    main()
