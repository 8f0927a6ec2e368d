"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from vaultdoc.errors import ConfigurationError

from .models import VaultdocConfig


def default_config_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [
        Path(cli_path) if cli_path else None,
        Path("./vaultdoc.yaml"),
        Path.home() / ".vaultdoc" / "config.yaml",
    ]
    return [p for p in paths if p is not None]


def find_config(cli_path: str | None = None) -> Path | None:
    """Return the first existing config file in resolution order, if any."""
    for path in default_config_paths(cli_path):
        if path.exists():
            return path
    return None


def load_config(cli_path: str | None = None) -> VaultdocConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    if cli_path and not Path(cli_path).exists():
        raise ConfigurationError(f"Config file not found: {cli_path}")

    for path in default_config_paths(cli_path):
        if path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ConfigurationError(f"Invalid config in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return VaultdocConfig(**raw)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ConfigurationError(f"Invalid config in {path}: {e}") from e

    return VaultdocConfig()


def save_config(config: VaultdocConfig, path: str | Path) -> Path:
    """Write the config back to disk as YAML."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    return target


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `vaultdoc config init`
DEFAULT_CONFIG_TEMPLATE = """\
# vaultdoc.yaml

# Source vault root
vault_path: ""

# Export defaults
export:
  export_path: "vault-export"  # relative paths land next to the vault, never inside it
  include_attachments: true
  render_diagrams: false       # false keeps diagrams as literal source blocks

# HTTP export API
server:
  enabled: true
  host: "127.0.0.1"
  port: 27125
  shutdown_timeout: 5.0

# Diagram renderers
renderers:
  builtin: [mermaid, plantuml, graphviz]
  custom_plugins: true         # load renderers from the vaultdoc.renderers entry point group

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
