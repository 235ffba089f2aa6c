import logging
import logging.config
from typing import Optional

from habit_tracker.config import TrackerConfig, config as default_config

def setup_logger(cfg: Optional[TrackerConfig] = None) -> logging.Logger:
    cfg = cfg or default_config
    cfg.ensure_directories()
    logging.config.dictConfig(cfg.get_logging_config())
    logger = logging.getLogger()
    logger.debug(f"Logging configured: level={cfg.log_level.value}, file={cfg.log_to_file}")
    return logger
