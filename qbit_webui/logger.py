import sys

from loguru import logger

from .config import Config


VERBOSE = Config.VERBOSE
LOG_PATH = Config.LOG_PATH
LOG_LEVEL = Config.LOG_LEVEL
LOG_ROTATION = Config.LOG_ROTATION
LOG_RETENTION = Config.LOG_RETENTION


# Silent unless configured below or enabled by the caller
logger.disable("qbit_webui")

# Log to a file
if LOG_PATH:
    logger.add(
        LOG_PATH,
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        level=LOG_LEVEL,
    )
    logger.enable("qbit_webui")

# Log to console
if VERBOSE:
    logger.add(
        sink=sys.stderr,
        level=LOG_LEVEL,
    )
    logger.enable("qbit_webui")
