# src/config/config.py
from pathlib import Path
import os
import tempfile
from dotenv import load_dotenv

# Load .env from project root only in development
if os.getenv("APP_ENV", "development") != "production":
    project_root = Path(__file__).parent.parent.parent  # src/config -> project root
    load_dotenv(project_root / ".env")


def _default_cache_dir() -> Path:
    xdg_cache = os.getenv("XDG_CACHE_HOME")
    base = Path(xdg_cache) if xdg_cache else Path.home() / ".cache"
    return base / "album-browser"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    # 1. Music library location
    MUSIC_ROOT = Path(os.getenv("MUSIC_ROOT", Path.home() / "Music"))

    # 2. Everything the browser writes lives below the cache dir
    CACHE_DIR = Path(os.getenv("CACHE_DIR", _default_cache_dir()))
    COVER_TMP_DIR = Path(os.getenv("COVER_TMP_DIR", tempfile.gettempdir()))
    LOG_DIR = Path(os.getenv("LOG_DIR", CACHE_DIR / "logs"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Derived paths; never override these directly
    CACHE_FILE = CACHE_DIR / "album-browser-cache.dat"

    # 3. Rescan when the library changes on disk
    WATCH_LIBRARY = _env_flag("WATCH_LIBRARY", True)
    WATCH_DEBOUNCE = float(os.getenv("WATCH_DEBOUNCE", "2.0"))

    @classmethod
    def ensure_dirs(cls):
        cls.CACHE_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestConfig(BaseConfig):
    DEBUG = True
    MUSIC_ROOT = Path("/tmp/album-browser-test-music")
    CACHE_DIR = Path("/tmp/album-browser-test-cache")  # isolated for tests
    LOG_DIR = CACHE_DIR / "logs"
    CACHE_FILE = CACHE_DIR / "album-browser-cache.dat"
    WATCH_LIBRARY = False


class ProductionConfig(BaseConfig):
    DEBUG = False


CONFIG_MAP = {
    "development": DevelopmentConfig,
    "test": TestConfig,
    "production": ProductionConfig,
}


def get_configuration() -> type[BaseConfig]:
    """
    Determines and returns the configuration class for the current environment.

    Selects the configuration based on the APP_ENV environment variable,
    ensures the cache and log directories exist, and returns the configuration class.

    Returns:
        type[BaseConfig]: The configuration class for the current environment.
    """
    env = os.getenv("APP_ENV", "development")
    config = CONFIG_MAP.get(env, DevelopmentConfig)
    config.ensure_dirs()
    return config
