"""CLI entry point for vaultdoc."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from vaultdoc.config import VaultdocConfig, load_config
from vaultdoc.config.loader import DEFAULT_CONFIG_TEMPLATE, find_config, save_config
from vaultdoc.errors import ConfigurationError, VaultdocError
from vaultdoc.export import VaultExporter
from vaultdoc.log import configure_logging
from vaultdoc.renderers import RendererRegistry
from vaultdoc.transform import ConversionContext, convert as convert_document
from vaultdoc.vault import ExportSettings, FilesystemStorage, SourceDocument
from vaultdoc.vault.classify import to_target_path
from vaultdoc.vault.paths import resolve_target

app = typer.Typer(
    name="vaultdoc",
    help="Export a Markdown vault to AsciiDoc, on disk or over HTTP.",
)

config_app = typer.Typer(help="Manage vaultdoc configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: VaultdocConfig | None = None
_config_path: str | None = None


def _get_config() -> VaultdocConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to vaultdoc.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config, _config_path
    try:
        _config = load_config(config)
    except ConfigurationError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _config_path = config
    configure_logging(_config.log_level, _config.log_format)


def _vault_root(vault: str, cfg: VaultdocConfig) -> Path:
    vault_path = vault or cfg.vault_path
    if not vault_path:
        rprint("[red]Error:[/red] pass VAULT or set vault_path in config")
        raise typer.Exit(1)
    root = Path(vault_path)
    if not root.is_dir():
        rprint(f"[red]Error:[/red] vault directory not found: {root}")
        raise typer.Exit(1)
    return root


def _exporter(root: Path, cfg: VaultdocConfig) -> VaultExporter:
    return VaultExporter(FilesystemStorage(root), RendererRegistry.from_config(cfg.renderers))


@app.command()
def export(
    vault: Annotated[str, typer.Argument(help="Path to the vault")] = "",
    out: Annotated[
        str | None, typer.Option("--out", "-o", help="Export folder (relative = next to the vault)")
    ] = None,
    attachments: Annotated[
        bool | None, typer.Option("--attachments/--no-attachments", help="Copy non-markdown files")
    ] = None,
    render_diagrams: Annotated[
        bool | None,
        typer.Option("--render-diagrams/--keep-diagrams", help="Render diagram fences or keep their source"),
    ] = None,
    remember: Annotated[bool, typer.Option("--remember", help="Save these choices as config defaults")] = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Convert in memory and list the output")] = False,
) -> None:
    """Export the vault to AsciiDoc."""
    cfg = _get_config()
    root = _vault_root(vault, cfg)

    export_path = out or cfg.export.export_path
    include = cfg.export.include_attachments if attachments is None else attachments
    render = cfg.export.render_diagrams if render_diagrams is None else render_diagrams
    settings = ExportSettings(
        target_location=export_path,
        include_assets=include,
        preserve_diagram_source=not render,
    )
    exporter = _exporter(root, cfg)

    if dry_run:
        bundle = asyncio.run(exporter.export_to_memory(settings))
        table = Table(title="Dry run: files that would be written")
        table.add_column("Path", style="cyan")
        table.add_column("Kind", style="green")
        table.add_column("Size", justify="right")
        for entry in bundle.entries:
            table.add_row(entry.target_path, entry.kind.value, str(entry.size))
        rprint(table)
        return

    try:
        report = asyncio.run(exporter.export_to_disk(settings))
    except (VaultdocError, OSError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="AsciiDoc Export")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Target", str(root / resolve_target(export_path)))
    table.add_row("Converted", str(report.converted))
    table.add_row("Copied", str(report.copied))
    table.add_row("Skipped", str(report.skipped))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    for issue in report.issues:
        rprint(f"  [red]error:[/red] {issue.file}: {issue.error}")

    if remember:
        cfg.vault_path = str(root)
        cfg.export.export_path = export_path
        cfg.export.include_attachments = include
        cfg.export.render_diagrams = render
        target = save_config(cfg, find_config(_config_path) or Path("vaultdoc.yaml"))
        rprint(f"[green]Saved defaults to[/green] {target}")


@app.command()
def convert(
    file: str = typer.Argument(..., help="Markdown file to convert"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write AsciiDoc to file"),
) -> None:
    """Convert a single markdown file to AsciiDoc."""
    cfg = _get_config()
    source = Path(file)
    try:
        content = source.read_text(encoding="utf-8")
    except OSError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    doc = SourceDocument.from_path(source.name, content=content)
    ctx = ConversionContext(
        settings=ExportSettings(preserve_diagram_source=not cfg.export.render_diagrams),
        renderers=RendererRegistry.from_config(cfg.renderers),
    )
    result = convert_document(doc, ctx)

    if output:
        Path(output).write_text(result, encoding="utf-8")
        rprint(f"[green]Written to[/green] {output}")
        rprint(
            Panel(
                f"[dim]Source:[/dim]  {source}\n"
                f"[dim]Target:[/dim]  {to_target_path(source.name)}\n"
                f"[dim]Size:[/dim]    {len(result)} chars",
                title="Conversion Result",
                border_style="green",
            )
        )
    else:
        typer.echo(result)


@app.command()
def serve(
    vault: Annotated[str, typer.Argument(help="Path to the vault")] = "",
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Bind port")] = None,
) -> None:
    """Serve the HTTP export API until interrupted."""
    from vaultdoc.server import ExportServer

    cfg = _get_config()
    if not cfg.server.enabled:
        rprint("[yellow]HTTP server is disabled in config (server.enabled: false).[/yellow]")
        raise typer.Exit(1)
    root = _vault_root(vault, cfg)
    server_cfg = cfg.server.model_copy(
        update={k: v for k, v in (("host", host), ("port", port)) if v is not None}
    )
    server = ExportServer(_exporter(root, cfg), server_cfg, default_path=cfg.export.export_path)
    rprint(f"[green]Serving[/green] {root} on {server.url} (Ctrl+C to stop)")
    try:
        asyncio.run(server.serve_forever())
    except VaultdocError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        pass
    rprint("Server stopped.")


@app.command()
def renderers() -> None:
    """List registered diagram renderers."""
    cfg = _get_config()
    registry = RendererRegistry.from_config(cfg.renderers)
    rows = registry.describe()
    if not rows:
        rprint("[yellow]No diagram renderers registered.[/yellow]")
        return
    table = Table(title=f"Diagram Renderers ({len(rows)})")
    table.add_column("Renderer", style="cyan")
    table.add_column("Languages", style="green")
    for name, languages in rows:
        table.add_row(name, ", ".join(languages))
    rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default vaultdoc.yaml in current directory."""
    target = Path("vaultdoc.yaml")
    if target.exists() and not force:
        rprint("[yellow]vaultdoc.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
