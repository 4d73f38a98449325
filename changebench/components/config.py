import logging
from typing import Optional

import yaml
from dotenv import load_dotenv
from prometheus_client import start_http_server

from .config_parser import Parameters
from .logs import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


def load_parameters(configfile: Optional[str] = None) -> Parameters:
    """
    Load the run parameters from a YAML file, defaults for anything missing.
    `MONGO_URI` (environment or `.env` file) overrides the store uri.
    """
    config = {}
    if configfile is not None:
        with open(configfile, "r") as file:
            config = yaml.safe_load(file) or {}

    params = Parameters(config)

    load_dotenv()
    params.store.set_attribute_from_env("uri", "MONGO_URI")

    logger.info("Parameters loaded", {"params": str(params)})
    return params


def start_metrics_server(port: int) -> bool:
    try:
        start_http_server(port)
    except OSError as err:
        logger.error(
            "Could not start the prometheus client",
            {"port": port, "error": f"[Errno {err.args[0]}]: {err.args[1]}"},
        )
        return False

    logger.info("Prometheus client started", {"port": port})
    return True
