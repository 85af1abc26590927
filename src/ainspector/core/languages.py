from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType

from ainspector.errors import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageSpec:
    """How to find functions in one kind of source file.

    ``grammar`` is the tree-sitter-language-pack grammar name, ``query`` the
    stem of the ``queries/<query>_functions.scm`` file, or ``None`` for
    languages that parse but have no functions.
    """

    name: str
    grammar: str
    query: str | None

    @property
    def has_functions(self) -> bool:
        return self.query is not None


_C = LanguageSpec("c", "c", "c")
_CPP = LanguageSpec("cpp", "cpp", "cpp")
_JAVASCRIPT = LanguageSpec("javascript", "javascript", "javascript")
_BASH = LanguageSpec("bash", "bash", "bash")
_HTML = LanguageSpec("html", "html", None)

_DEFAULT_EXTENSIONS: dict[str, LanguageSpec] = {
    ".bash": _BASH,
    ".c": _C,
    ".cc": _CPP,
    ".cpp": _CPP,
    ".cs": LanguageSpec("csharp", "csharp", "csharp"),
    ".css": LanguageSpec("css", "css", None),
    ".go": LanguageSpec("go", "go", "go"),
    ".h": _C,
    ".hpp": _CPP,
    ".htm": _HTML,
    ".html": _HTML,
    ".java": LanguageSpec("java", "java", "java"),
    ".js": _JAVASCRIPT,
    ".json": LanguageSpec("json", "json", None),
    ".jsx": _JAVASCRIPT,
    ".php": LanguageSpec("php", "php", "php"),
    ".py": LanguageSpec("python", "python", "python"),
    ".rb": LanguageSpec("ruby", "ruby", "ruby"),
    ".rs": LanguageSpec("rust", "rust", "rust"),
    ".sh": _BASH,
    ".ts": LanguageSpec("typescript", "typescript", "typescript"),
    ".tsx": LanguageSpec("typescript", "tsx", "typescript"),
}


class LanguageRegistry(Mapping[str, LanguageSpec]):
    """Read-only map from lower-case file extension to :class:`LanguageSpec`."""

    def __init__(self, extensions: Mapping[str, LanguageSpec]) -> None:
        self._extensions = MappingProxyType({ext.lower(): spec for ext, spec in extensions.items()})

    def __getitem__(self, extension: str) -> LanguageSpec:
        return self._extensions[extension]

    def __iter__(self) -> Iterator[str]:
        return iter(self._extensions)

    def __len__(self) -> int:
        return len(self._extensions)

    def lookup(self, file_path: str) -> LanguageSpec | None:
        return self._extensions.get(PurePosixPath(file_path).suffix.lower())

    def resolve(self, file_path: str) -> LanguageSpec:
        spec = self.lookup(file_path)
        if spec is None:
            raise UnsupportedLanguageError(f"Unsupported file extension: {PurePosixPath(file_path).suffix}")
        return spec

    def is_supported(self, file_path: str) -> bool:
        """True when ``file_path`` has a language with a function query."""
        spec = self.lookup(file_path)
        return spec is not None and spec.has_functions

    def supported_extensions(self) -> list[str]:
        return sorted(ext for ext, spec in self._extensions.items() if spec.has_functions)


def build_language_registry(extra: Mapping[str, LanguageSpec] | None = None) -> LanguageRegistry:
    extensions = dict(_DEFAULT_EXTENSIONS)
    if extra:
        extensions.update(extra)
    return LanguageRegistry(extensions)
