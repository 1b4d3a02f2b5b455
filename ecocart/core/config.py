from functools import lru_cache
from pathlib import Path
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

DEFAULT_MODEL_PATH = str(Path(__file__).resolve().parent.parent / "ml" / "artifacts" / "eco_classifier.json")

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "EcoCart"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo (empty URI = no connection, e.g. in tests)
    MONGO_URI: str = ""
    MONGO_DB: str = "ecocart"

    # Redis (optional, only caches alternatives)
    REDIS_URL: str = ""

    # Classifier artifact, trained offline by `python -m ecocart.ml.train`
    CLASSIFIER_MODEL_PATH: str = DEFAULT_MODEL_PATH

    # Alternatives
    cart_alternatives_limit: int = 3             # greener-cart suggestions per line
    product_alternatives_limit: int = 5          # product detail / chat
    max_alternatives_limit: int = 20
    alternatives_cache_ttl: int = 5 * 60         # 5 minutes

    # Cart optimistic concurrency
    cart_update_retries: int = 3

    # OpenAI (explanation rewrite, optional)
    OPENAI_API_KEY: str = ""
    OPENAI_EXPLAIN_MODEL: str = "gpt-4o-mini"
    openai_timeout_s: int = 15  # seconds

    # API
    api_prefix: str = "/api"

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
