from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "days": 1,
    "model": "openai/gpt-4o",
    "repo": None,  # "owner/name" to restrict every search to one repository
    "user": None,  # None = the authenticated user
}


def load_config(config_path: str = ".standup.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .standup.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            try:
                file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Config file {config_path} is not valid YAML: {e}") from e
        if not isinstance(file_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping.")
        config.update({k: v for k, v in file_config.items() if k in DEFAULT_CONFIG})

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config
