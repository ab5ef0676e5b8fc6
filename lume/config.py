from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = 'postgresql+asyncpg://postgres:password@db/lume'
    database_echo: bool = False

    jwt_secret: str = 'change-me'
    jwt_algorithm: str = 'HS256'

    # Ownerless artifacts are always readable; writing them is opt-in.
    allow_ownerless_writes: bool = False
    # Reject artifact types without a registered content schema.
    strict_artifact_types: bool = False

    logging_level: Optional[str] = 'INFO'

    sentry_environment: str = 'dev'
    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = 0.2


settings = Settings()
