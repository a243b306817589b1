from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DATAMAPPER_", extra="ignore")

    root_namespace: str = "app"
    # leading identifier segments dropped when deriving table names
    namespace_depth: int = 2
    app_path: Path = Path("app")

    log_level: str = "INFO"

settings = Settings()
