import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Detect the environment (Docker or local)
if os.getenv("RUNNING_IN_DOCKER", "false").lower() == "true":
    # In Docker, using absolute paths
    base_path = "/tmp/webextract"
    default_database_url = "sqlite:////tmp/webextract/webextract.db"
else:
    # Locally, using relative paths
    base_path = "."
    default_database_url = "sqlite:///./webextract.db"

BASE_PATH = base_path

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", default_database_url)
SQL_ECHO = os.getenv("SQL_ECHO", "False").lower() in ("1", "true", "yes")


def get_env_variable_path(var_name: str, default_value: str = None):
    """
    Get an environment variable with a default value and construct its absolute path.

    Args:
        var_name (str): The name of the environment variable.
        default_value: The value to return if the variable is not set.

    Returns:
        str: The value of the environment variable or the default value.
    """
    path = os.getenv(var_name, default_value)
    return os.path.join(BASE_PATH, path)


# Folders
LOG_FOLDER = get_env_variable_path("LOG_FOLDER", "logs")
exports_folder = get_env_variable_path("EXPORTS_FOLDER", "data/exports")

# Workflow configuration
CLEANUP_DELAY_SECONDS = float(os.getenv("CLEANUP_DELAY_SECONDS", "1"))

# Scraping configuration
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (compatible; webextract/0.1; +https://example.com/bot)",
)
MAX_PAGES = int(os.getenv("MAX_PAGES", "5"))

EXTRACTION_CONFIG = {
    "request_timeout": REQUEST_TIMEOUT,
    "user_agent": USER_AGENT,
    "max_pages": MAX_PAGES,
}
