import logging
from dataclasses import dataclass

from ainspector.core.extract import extract_modified_functions
from ainspector.core.fingerprint import format_marker, function_fingerprint
from ainspector.core.functions import FunctionParser
from ainspector.core.ports.provider import ChangesetProvider
from ainspector.core.tracker import ReviewTracker
from ainspector.models import ExtractedFunction, ReviewComment
from ainspector.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewPlan:
    functions: list[ExtractedFunction]
    pending: list[ExtractedFunction]
    reviewed_count: int = 0

    @property
    def skipped(self) -> int:
        return len(self.functions) - len(self.pending)


def plan_review(
    provider: ChangesetProvider,
    parser: FunctionParser,
    settings: Settings | None = None,
    force: bool = False,
) -> ReviewPlan:
    """Extract the touched functions of a changeset and drop those already reviewed.

    With ``force`` every touched function stays pending. If prior comments
    cannot be fetched, nothing is skipped.
    """
    files = provider.get_modified_files()
    logger.info("Found %d modified files", len(files))

    functions = extract_modified_functions(provider, files, parser, settings)
    logger.info("Extracted %d modified functions", len(functions))
    if force or not functions:
        return ReviewPlan(functions=functions, pending=list(functions))

    try:
        comments = provider.get_review_comments()
    except Exception as exc:
        logger.warning("Could not fetch existing comments: %s", exc)
        return ReviewPlan(functions=functions, pending=list(functions))

    tracker = ReviewTracker()
    tracker.load_from_comments(comments)
    pending = tracker.filter_unreviewed(functions)
    if len(pending) < len(functions):
        logger.info("Skipped %d already reviewed functions", len(functions) - len(pending))
    return ReviewPlan(functions=functions, pending=pending, reviewed_count=tracker.reviewed_count())


def annotate_comment(body: str, fn: ExtractedFunction) -> str:
    """Append the function's marker so the next run recognises it as reviewed."""
    return f"{body}\n\n{format_marker(function_fingerprint(fn))}"


def build_review_comment(fn: ExtractedFunction, line: int, body: str) -> ReviewComment:
    return ReviewComment(path=fn.file_path, line=line, body=annotate_comment(body, fn))
