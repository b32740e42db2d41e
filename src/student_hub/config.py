"""Portal client settings loaded from YAML and environment."""

import os
from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: pip install PyYAML"
    ) from e
from pydantic import BaseModel, Field

ENV_PREFIX = "STUDENT_HUB_"


class PortalSettings(BaseModel):
    """Connection and display settings for the portal API client."""

    base_url: str = Field(default="http://localhost:5000", description="Backend origin")
    api_prefix: str = Field(default="/api", description="Prefix added to relative paths")
    timeout: float = Field(default=15.0, gt=0)
    page_size: int = Field(default=12, ge=1, description="Listing page size")
    user_agent: str = "student-hub/0.1"
    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PortalSettings":
        """Load settings from YAML. Supports nested (api/logging) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        api = data.get("api", {})
        logging_section = data.get("logging", {})

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict = {}
        for key in ("base_url", "api_prefix", "timeout", "page_size", "user_agent"):
            value = _get(key, api, data)
            if value is not None:
                flat[key] = value
        level = logging_section.get("level", data.get("log_level"))
        if level is not None:
            flat["log_level"] = str(level).upper()
        return cls.model_validate(flat)

    @classmethod
    def from_env(
        cls,
        path: Optional[str | Path] = None,
        environ: Optional[dict[str, str]] = None,
    ) -> "PortalSettings":
        """
        Load settings from an optional YAML file, then apply STUDENT_HUB_* overrides.
        STUDENT_HUB_CONFIG names the YAML file when path is not given.
        """
        env = os.environ if environ is None else environ
        path = path or env.get(f"{ENV_PREFIX}CONFIG")
        base = cls.from_yaml(path) if path else cls()

        overrides: dict = {}
        for key in ("base_url", "api_prefix", "timeout", "page_size", "user_agent", "log_level"):
            value = env.get(f"{ENV_PREFIX}{key.upper()}")
            if value:
                overrides[key] = value.strip()
        if not overrides:
            return base
        return cls.model_validate({**base.model_dump(), **overrides})
