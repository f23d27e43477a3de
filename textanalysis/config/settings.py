from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    aws_region: str = "eu-west-1"
    aws_profile: str | None = "developerPlayground"

    input_bucket: str = "whatif-local-news-le"
    analysis_bucket: str = "lauren-temp"
    data_access_role_arn: str = "arn:aws:iam::942464564246:role/comprehend-s3-access"
    language_code: str = "en"

    entities_output_prefix: str = "entities"
    key_phrases_output_prefix: str = "key-phrases"

    job_poll_interval_seconds: float = 10
    job_timeout_seconds: float | None = None

    top_negative_sentences: int = Field(default=10, ge=1, le=10)
