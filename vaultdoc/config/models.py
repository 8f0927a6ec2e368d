from pydantic import BaseModel, Field
from typing import Literal


class ExportDefaults(BaseModel):
    export_path: str = "vault-export"
    include_attachments: bool = True
    render_diagrams: bool = False


class ServerConfig(BaseModel):
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = Field(default=27125, gt=0, lt=65536)
    shutdown_timeout: float = Field(default=5.0, ge=0)


class RendererConfig(BaseModel):
    builtin: list[str] = Field(default_factory=lambda: ["mermaid", "plantuml", "graphviz"])
    custom_plugins: bool = True


class VaultdocConfig(BaseModel):
    vault_path: str = ""
    export: ExportDefaults = Field(default_factory=ExportDefaults)
    server: ServerConfig = Field(default_factory=ServerConfig)
    renderers: RendererConfig = Field(default_factory=RendererConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
