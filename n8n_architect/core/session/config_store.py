"""Persisted connection config for n8n Architect.

One JSON file holding a single record under a fixed key. Read once at startup,
rewritten on every save, removed on logout.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from n8n_architect.config import Config
from n8n_architect.core.logging import logger
from n8n_architect.models.connection import ConnectionConfig

STORAGE_KEY = "n8n_config"


class ConfigStore:
    """File-backed store for the ConnectionConfig."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize ConfigStore.

        Args:
            path: File to use (defaults to Config.config_store_path())
        """
        self.path = Path(path) if path is not None else Config.config_store_path()

    def load(self) -> Optional[ConnectionConfig]:
        """Load the saved config.

        Returns:
            ConnectionConfig, or None if nothing is saved or the file is unreadable
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            record = data.get(STORAGE_KEY) if isinstance(data, dict) else None
            if record is None:
                return None
            return ConnectionConfig.model_validate(record)
        except (OSError, ValueError, ValidationError) as e:
            logger.error("config_load_failed", path=str(self.path), error=str(e))
            return None

    def save(self, config: ConnectionConfig) -> None:
        """Persist config, replacing whatever was saved before."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps({STORAGE_KEY: config.to_storage()}, indent=2), encoding="utf-8"
            )
            # The file holds an API key
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.info("config_saved", path=str(self.path), base_url=config.base_url)

    def clear(self) -> None:
        """Remove the saved config (logout)."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        logger.info("config_cleared", path=str(self.path))
