class AinspectorError(Exception):
    """Base class for errors raised by ainspector."""


class PatchParseError(AinspectorError):
    """A unified diff could not be parsed into hunks."""


class UnsupportedLanguageError(AinspectorError, ValueError):
    """No function query exists for a file's extension."""


class ProviderError(AinspectorError):
    """A changeset provider failed to return files, content or comments."""
