"""Tests for the vaultdoc CLI commands."""

from __future__ import annotations

import logging

import pytest
import yaml
from typer.testing import CliRunner

from vaultdoc.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
    yield
    # the CLI callback installs a root handler bound to the runner's stream
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


class TestExportCommand:
    def test_export_writes_next_to_vault(self, linked_vault):
        result = runner.invoke(app, ["export", str(linked_vault)])
        assert result.exit_code == 0, result.output
        out = linked_vault.parent / "vault-export"
        assert (out / "notes" / "a.adoc").exists()
        assert (out / "index.adoc").exists()
        assert "Converted" in result.output

    def test_out_and_no_attachments(self, mixed_vault):
        result = runner.invoke(app, ["export", str(mixed_vault), "--out", "adoc", "--no-attachments"])
        assert result.exit_code == 0, result.output
        out = mixed_vault.parent / "adoc"
        assert (out / "notes" / "b.adoc").exists()
        assert not (out / "pic.png").exists()

    def test_dry_run_writes_nothing(self, linked_vault):
        result = runner.invoke(app, ["export", str(linked_vault), "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "notes/a.adoc" in result.output
        assert not (linked_vault.parent / "vault-export").exists()

    def test_missing_vault_argument(self):
        result = runner.invoke(app, ["export"])
        assert result.exit_code == 1

    def test_nonexistent_vault(self, tmp_path):
        result = runner.invoke(app, ["export", str(tmp_path / "nope")])
        assert result.exit_code == 1

    def test_remember_saves_defaults(self, linked_vault, tmp_path):
        result = runner.invoke(app, ["export", str(linked_vault), "--out", "saved", "--remember"])
        assert result.exit_code == 0, result.output
        saved = yaml.safe_load((tmp_path / "vaultdoc.yaml").read_text())
        assert saved["export"]["export_path"] == "saved"
        assert saved["vault_path"] == str(linked_vault)

    def test_vault_from_config(self, linked_vault, tmp_path):
        (tmp_path / "vaultdoc.yaml").write_text(f'vault_path: "{linked_vault}"\n')
        result = runner.invoke(app, ["export"])
        assert result.exit_code == 0, result.output
        assert (linked_vault.parent / "vault-export" / "index.adoc").exists()


class TestConvertCommand:
    def test_prints_asciidoc(self, tmp_path):
        src = tmp_path / "page.md"
        src.write_text("# Hello\n\n**bold**\n")
        result = runner.invoke(app, ["convert", str(src)])
        assert result.exit_code == 0, result.output
        assert "= page" in result.output
        assert "= Hello" in result.output
        assert "*bold*" in result.output

    def test_output_file(self, tmp_path):
        src = tmp_path / "page.md"
        src.write_text("text\n")
        result = runner.invoke(app, ["convert", str(src), "--output", "page.adoc"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "page.adoc").read_text().startswith("= page\n")

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "nope.md")])
        assert result.exit_code == 1


class TestMiscCommands:
    def test_renderers(self):
        result = runner.invoke(app, ["renderers"])
        assert result.exit_code == 0, result.output
        assert "mermaid" in result.output
        assert "plantuml" in result.output

    def test_config_init_and_show(self, tmp_path):
        assert runner.invoke(app, ["config", "init"]).exit_code == 0
        assert (tmp_path / "vaultdoc.yaml").exists()
        assert runner.invoke(app, ["config", "init"]).exit_code == 1
        assert runner.invoke(app, ["config", "init", "--force"]).exit_code == 0
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "export_path" in result.output

    def test_bad_config_file(self, tmp_path):
        (tmp_path / "bad.yaml").write_text("server: [\n")
        result = runner.invoke(app, ["--config", str(tmp_path / "bad.yaml"), "renderers"])
        assert result.exit_code == 1

    def test_serve_disabled(self, linked_vault, tmp_path):
        (tmp_path / "vaultdoc.yaml").write_text("server:\n  enabled: false\n")
        result = runner.invoke(app, ["serve", str(linked_vault)])
        assert result.exit_code == 1
