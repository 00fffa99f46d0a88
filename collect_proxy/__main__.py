import logging
import sys

from . import create_app
from .src.config import Config
from .src.errors import AuthError, ConfigurationError


def main():
    try:
        app = create_app(Config)
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.INFO)
        logging.error("Invalid configuration: %s", exc)
        sys.exit(1)

    client = app.extensions["data_client"]
    if client.environment.authenticated:
        if client.token_manager.current_token():
            logging.info("Using API token from configuration")
        else:
            try:
                client.token_manager.acquire()
                logging.info("Successfully obtained OAuth token")
            except AuthError as exc:
                logging.error("Failed to obtain initial OAuth token: %s", exc)
                sys.exit(1)
    else:
        logging.info("Development environment: skipping initial token acquisition")

    logging.info("Running in %s environment on port %d", client.environment.value, Config.PORT)
    app.run(host="0.0.0.0", port=Config.PORT, debug=Config.DEBUG, use_reloader=False)


if __name__ == "__main__":
    main()
