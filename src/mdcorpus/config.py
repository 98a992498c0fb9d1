"""mdcorpus settings: corpus location, export options, and logging level"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    """Options shared by every mdcorpus command."""
    app_name:      str = "mdcorpus"
    content_dir:   str = Field(default="content",  description="Default corpus directory for commands")
    output_dir:    str = Field(default="dist",     description="Directory for exported pages + JSON files")
    output_format: str = Field(default="html", pattern="^(html|md)$", description="html or md")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    workers:       int = Field(default=1, ge=1,    description="Files parsed in parallel during load")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Build Settings; later layers win.

    Order: field defaults, config.yaml in the working directory, MDCORPUS_<FIELD>
    environment variables, then CLI overrides that are not None.
    """
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDCORPUS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
