from pydantic_settings import BaseSettings


class UISettings(BaseSettings):
    resume_api_url: str = "http://localhost:5000/api"
    # None waits as long as the server does
    resume_api_timeout: float | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


ui_settings = UISettings()
