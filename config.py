import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Catalog")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Catalog settings
    # Start API and CLI libraries with the demo books and users
    seed_demo: bool = os.getenv("LIBRARY_SEED_DEMO", "True").lower() in ("true", "1", "yes")

    # CLI settings
    cli_output: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()


settings = Settings()
