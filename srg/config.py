"""
Build settings.

Settings are merged with OmegaConf in increasing priority:
structured defaults, an optional YAML config file, environment variables
(read after loading a .env file), then explicit overrides from the CLI.

Environment variables:
    SRG_OUT_DIR: Output directory for index.html and resume.pdf
    SRG_TEMPLATE: Template name
    SRG_LOGS_PATH: Directory for build log files
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

# Environment variable name -> settings key
ENV_VARS = {
    "SRG_OUT_DIR": "out_dir",
    "SRG_TEMPLATE": "template",
    "SRG_LOGS_PATH": "logs_path",
}


@dataclass
class BuildSettings:
    """
    Settings for one build.

    Attributes:
        out_dir: Output directory
        template: Template name
        logs_path: Directory for log files (None logs to the console only)
        write_pdf: Also write resume.pdf
        strict: Treat parse warnings as errors
    """

    out_dir: str = "dist"
    template: str = "minimal"
    logs_path: Optional[str] = None
    write_pdf: bool = True
    strict: bool = False

    @property
    def out_path(self) -> Path:
        return Path(self.out_dir)

    @property
    def log_dir(self) -> Optional[Path]:
        return Path(self.logs_path) if self.logs_path else None


def _env_layer() -> dict:
    load_dotenv()
    return {key: os.getenv(name) for name, key in ENV_VARS.items() if os.getenv(name)}


def load_settings(config_path: Optional[Path] = None, **overrides) -> BuildSettings:
    """
    Merge every settings layer into BuildSettings.

    Args:
        config_path: Optional YAML file with any BuildSettings keys
        **overrides: Explicit values (None values are ignored)

    Returns:
        BuildSettings

    Raises:
        FileNotFoundError: If config_path does not exist
        omegaconf.errors.ValidationError: If a value has the wrong type
        omegaconf.errors.ConfigKeyError: If the file contains an unknown key
    """
    layers = [OmegaConf.structured(BuildSettings)]

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        layers.append(OmegaConf.load(config_path))

    layers.append(OmegaConf.create(_env_layer()))
    explicit = {
        key: str(value) if isinstance(value, Path) else value
        for key, value in overrides.items()
        if value is not None
    }
    layers.append(OmegaConf.create(explicit))

    merged = OmegaConf.merge(*layers)
    return OmegaConf.to_object(merged)
