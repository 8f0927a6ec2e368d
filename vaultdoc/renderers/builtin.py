"""Built-in renderers emitting Asciidoctor Diagram blocks."""

from __future__ import annotations


class AsciidoctorDiagramRenderer:
    """Wraps fence source in a diagram block that asciidoctor-diagram renders at build time.

    ```mermaid      ->    [mermaid]
    graph TD;             ....
    ```                   graph TD;
                          ....
    """

    def __init__(self, name: str, languages: list[str], block: str | None = None) -> None:
        self.name = name
        self._languages = [lang.lower() for lang in languages]
        self._block = block or name

    def supported_types(self) -> list[str]:
        return list(self._languages)

    def render(self, language: str, source: str) -> str | None:
        if language.lower() not in self._languages:
            return None
        body = source.strip("\n")
        if not body.strip():
            return None
        return f"[{self._block}]\n....\n{body}\n...."


BUILTIN_RENDERERS: dict[str, AsciidoctorDiagramRenderer] = {
    "mermaid": AsciidoctorDiagramRenderer("mermaid", ["mermaid"]),
    "plantuml": AsciidoctorDiagramRenderer("plantuml", ["plantuml", "puml"]),
    "graphviz": AsciidoctorDiagramRenderer("graphviz", ["graphviz", "dot"]),
}
