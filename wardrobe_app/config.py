"""Configuration helpers for the virtual wardrobe."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_STORE_NAME = "virtualWardrobe"
DEFAULT_TABLE_NAME = "wardrobe_data"
DEFAULT_MAX_IMAGE_HEIGHT = 550
DEFAULT_IMAGE_QUALITY = 0.8


@dataclass
class WardrobeConfig:
    """Configuration values for a wardrobe session.

    The store name doubles as the database file stem so that two configured
    wardrobes never share a file by accident.
    """

    store_name: str = DEFAULT_STORE_NAME
    table_name: str = DEFAULT_TABLE_NAME
    data_dir: str = "data"
    database_path: Optional[str] = None
    max_image_height: int = DEFAULT_MAX_IMAGE_HEIGHT
    image_quality: float = DEFAULT_IMAGE_QUALITY
    log_level: Optional[str] = None
    environment: str | None = None

    @property
    def resolved_database_path(self) -> Path:
        if self.database_path:
            return Path(self.database_path)
        return Path(self.data_dir) / f"{self.store_name}.db"

    @classmethod
    def from_env(cls) -> "WardrobeConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("WARDROBE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = f"WARDROBE_{key.upper()}"
            return os.getenv(env_key, yaml_config.get(key, default))

        store_name = get_value("store_name", DEFAULT_STORE_NAME)
        table_name = get_value("table_name", DEFAULT_TABLE_NAME)
        data_dir = get_value("data_dir", "data")
        database_path = get_value("database_path")
        max_image_height = get_value("max_image_height")
        image_quality = get_value("image_quality")
        log_level = os.getenv("LOG_LEVEL", yaml_config.get("log_level"))

        return cls(
            store_name=str(store_name or DEFAULT_STORE_NAME),
            table_name=str(table_name or DEFAULT_TABLE_NAME),
            data_dir=str(data_dir or "data"),
            database_path=database_path,
            max_image_height=int(max_image_height) if max_image_height else DEFAULT_MAX_IMAGE_HEIGHT,
            image_quality=float(image_quality) if image_quality else DEFAULT_IMAGE_QUALITY,
            log_level=log_level,
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
