from pydantic_settings import BaseSettings, SettingsConfigDict

# gitlab API constants
API_PATH = "/api/v4"
DEFAULT_GITLAB_URL = "https://gitlab.com"
PRIVATE_TOKEN_HEADER = "PRIVATE-TOKEN"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=[".env"], extra="ignore")

    gitlab_url: str = DEFAULT_GITLAB_URL
    gitlab_token: str = ""

    # log every request line at INFO instead of DEBUG
    gitlab_verbose: bool = False

    # seconds, handed to the httpx transport
    gitlab_timeout: float = 10.0

    log_level: str = "INFO"


settings = Settings()
