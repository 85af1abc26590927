import logging
from collections.abc import Sequence

from ainspector.core.diff import extract_diff_for_range, parse_patch
from ainspector.core.functions import FunctionParser
from ainspector.core.ports.provider import ChangesetProvider
from ainspector.errors import AinspectorError
from ainspector.models import ChangeType, ExtractedFunction, FunctionBoundary, ModifiedFile
from ainspector.settings import Settings

logger = logging.getLogger(__name__)


def correlate_functions(
    file: ModifiedFile,
    boundaries: Sequence[FunctionBoundary],
    language: str,
) -> list[ExtractedFunction]:
    """Return the functions of ``file`` that contain an added line, in ``boundaries`` order.

    Raises :class:`~ainspector.errors.PatchParseError` for an unparseable patch.
    """
    if file.status == "deleted":
        raise ValueError(f"Cannot correlate deleted file: {file.path}")

    modified_lines = parse_patch(file.patch)
    change_type: ChangeType = "added" if file.status == "added" else "modified"

    result: list[ExtractedFunction] = []
    for boundary in boundaries:
        if not modified_lines.has_modified_line_in_range(boundary.start_line, boundary.end_line):
            continue
        result.append(
            ExtractedFunction(
                name=boundary.name,
                start_line=boundary.start_line,
                end_line=boundary.end_line,
                content=boundary.content,
                diff=extract_diff_for_range(file.patch, boundary.start_line, boundary.end_line),
                file_path=file.path,
                language=language,
                change_type=change_type,
            )
        )
    return result


def _extract_from_file(
    provider: ChangesetProvider, file: ModifiedFile, parser: FunctionParser
) -> list[ExtractedFunction]:
    content = file.content if file.content is not None else provider.get_file_content(file.path)
    boundaries, language = parser.parse(file.path, content)
    return correlate_functions(file, boundaries, language)


def extract_modified_functions(
    provider: ChangesetProvider,
    files: Sequence[ModifiedFile],
    parser: FunctionParser,
    settings: Settings | None = None,
) -> list[ExtractedFunction]:
    """Extract touched functions from every reviewable file.

    Deleted, ignored and unsupported files are skipped. A file that fails to
    load or parse is logged and skipped; the rest of the batch continues.
    """
    settings = settings or Settings()
    registry = parser.registry

    result: list[ExtractedFunction] = []
    for file in files:
        if file.status == "deleted":
            continue
        if settings.should_ignore(file.path):
            logger.info("Skipping ignored file: %s", file.path)
            continue
        if not registry.is_supported(file.path):
            continue

        try:
            functions = _extract_from_file(provider, file, parser)
        except (AinspectorError, OSError, ValueError) as exc:
            logger.warning("Failed to extract functions from %s: %s", file.path, exc)
            continue

        logger.debug("Extracted %d functions from %s", len(functions), file.path)
        result.extend(functions)

    return result
