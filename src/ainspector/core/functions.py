import logging
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from ainspector.core.languages import LanguageRegistry, LanguageSpec
from ainspector.models import ANONYMOUS_FUNCTION, FunctionBoundary

logger = logging.getLogger(__name__)

_QUERIES_DIR = Path(__file__).parent.parent / "queries"
_FUNCTION_CAPTURE = "def.func"
_NAME_CAPTURE = "def.func.name"


def _load_query(spec: LanguageSpec) -> Query:
    query_path = _QUERIES_DIR / f"{spec.query}_functions.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, spec.grammar)), query_text)


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


class FunctionParser:
    """Find function and method boundaries with tree-sitter.

    Compiled queries are cached per grammar for the parser's lifetime.
    """

    def __init__(self, registry: LanguageRegistry) -> None:
        self._registry = registry
        self._queries: dict[str, Query] = {}

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    def _query_for(self, spec: LanguageSpec) -> Query:
        if spec.grammar not in self._queries:
            self._queries[spec.grammar] = _load_query(spec)
        return self._queries[spec.grammar]

    def parse(self, path: str, content: str) -> tuple[list[FunctionBoundary], str]:
        """Return the functions defined in ``content`` and the language name.

        Boundaries use 1-based inclusive new-file line numbers and are sorted by
        ``(start_line, end_line)``. Matches sharing a span collapse to the first.
        """
        spec = self._registry.resolve(path)
        if not spec.has_functions:
            return [], spec.name

        source_bytes = content.encode("utf-8")
        tree = get_parser(cast(SupportedLanguage, spec.grammar)).parse(source_bytes)
        cursor = QueryCursor(self._query_for(spec))

        boundaries: dict[tuple[int, int], FunctionBoundary] = {}
        for _, captures in cursor.matches(tree.root_node):
            fn_nodes = captures.get(_FUNCTION_CAPTURE)
            if not fn_nodes:
                continue
            fn_node = fn_nodes[0]
            span = (fn_node.start_point[0] + 1, fn_node.end_point[0] + 1)
            if span in boundaries:
                continue

            name_nodes = captures.get(_NAME_CAPTURE)
            name = _node_text(name_nodes[0], source_bytes) if name_nodes else ""
            boundaries[span] = FunctionBoundary(
                name=name or ANONYMOUS_FUNCTION,
                start_line=span[0],
                end_line=span[1],
                content=_node_text(fn_node, source_bytes).strip(),
            )

        logger.debug("Found %d functions in %s", len(boundaries), path)
        return sorted(boundaries.values(), key=lambda b: (b.start_line, b.end_line)), spec.name
