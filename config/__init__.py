from .config import (
    BASE_PATH,
    CLEANUP_DELAY_SECONDS,
    DATABASE_URL,
    EXTRACTION_CONFIG,
    LOG_FOLDER,
    MAX_PAGES,
    REQUEST_TIMEOUT,
    SQL_ECHO,
    USER_AGENT,
    exports_folder,
    get_env_variable_path,
)
from .logging_config import get_logger, setup_logging
