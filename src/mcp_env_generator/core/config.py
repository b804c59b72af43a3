import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    app_title: str
    debug: bool


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache()
def get_settings() -> Settings:
    """
    Loads the generator service settings from the environment:
    APP_TITLE (service title shown in the OpenAPI docs) and DEBUG.
    """
    return Settings(
        app_title=os.getenv("APP_TITLE", "MCP Environment Template Generator"),
        debug=_env_bool("DEBUG", default=False),
    )
