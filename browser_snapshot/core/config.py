"""Configuration for BrowserSnapshot sessions."""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

ENV_PREFIX = "BROWSER_SNAPSHOT_"


class SnapshotConfig(BaseModel):
    """Options for capturing and resolving snapshots."""
    snapshot_index: int = Field(default=1, ge=1)
    readiness_timeout_ms: int = Field(default=2000, ge=0)
    default_role_hint: str = "button"
    output_style: Literal["lines", "yaml"] = "lines"
    indent: int = Field(default=2, ge=1)
    filter_policy: Literal["structural", "all"] = "structural"
    include_ignored: bool = True
    verbose: int = Field(default=0, ge=0, le=3)

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None, **overrides: Any) -> 'SnapshotConfig':
        """
        Build a config from ``BROWSER_SNAPSHOT_*`` environment variables.

        Args:
            env_file: Optional .env file loaded first (existing variables win)
            **overrides: Explicit values that take precedence over the environment

        Raises:
            ConfigurationError: when a variable has an invalid value
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)

        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + field_name.upper())
            if raw is not None and raw != "":
                values[field_name] = raw
        values.update(overrides)

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e
