from .loader import find_config, load_config, save_config
from .models import (
    ExportDefaults,
    RendererConfig,
    ServerConfig,
    VaultdocConfig,
)

__all__ = [
    "ExportDefaults",
    "RendererConfig",
    "ServerConfig",
    "VaultdocConfig",
    "find_config",
    "load_config",
    "save_config",
]
