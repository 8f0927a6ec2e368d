"""vaultdoc: export a Markdown vault to AsciiDoc."""

__version__ = "0.1.0"
