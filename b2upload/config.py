#!/usr/bin/python3
"""
optional yaml configuration in homepath
"""
import logging
import os

# non std modules
import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "b2upload.yml"

DEFAULTS = {
    "API_URL": "https://api.backblaze.com",
    "TIMEOUT": 600,  # seconds, for sending and receiving
    "UPLOAD_BLOCKSIZE": 1024 * 32,
    "DIGEST_BLOCKSIZE": 4096,
    "LOG_LEVEL": "INFO",
}


class B2ConfigError(Exception):
    pass


def load_config(homepath: str) -> dict:
    """
    return config dictionary, defaults updated by section B2Upload of
    b2upload.yml in homepath, if this file exists

    :param homepath <str>: directory to search for b2upload.yml
    :return <dict>: config
    """
    config = dict(DEFAULTS)
    configfile = os.path.join(homepath, CONFIG_FILENAME)
    if not os.path.isfile(configfile):
        logger.debug(f"no configuration file {configfile}, using defaults")
        return config
    with open(configfile, "rt", encoding="utf8") as infile:
        try:
            data = yaml.safe_load(infile.read())
            config.update(data["B2Upload"])  # otherwise KeyError - invalid Config
        except (KeyError, TypeError, ValueError, yaml.YAMLError) as exc:
            raise B2ConfigError(
                f"invalid config file {configfile}, at least key B2Upload must exist"
            ) from exc
    logger.debug(yaml.dump(config, indent=2))
    for key in ("UPLOAD_BLOCKSIZE", "DIGEST_BLOCKSIZE", "TIMEOUT"):
        if isinstance(config[key], bool) or not isinstance(config[key], int) or config[key] <= 0:
            raise B2ConfigError(f"{key} has to be a positive integer, got {config[key]}")
    if config["LOG_LEVEL"] not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise B2ConfigError(f"unknown LOG_LEVEL {config['LOG_LEVEL']}")
    # use proxy, if defined in config
    if "HTTP_PROXY" in config:
        os.environ["HTTP_PROXY"] = config["HTTP_PROXY"]
    if "HTTPS_PROXY" in config:
        os.environ["HTTPS_PROXY"] = config["HTTPS_PROXY"]
    return config
