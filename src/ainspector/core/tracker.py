from collections.abc import Iterable, Sequence
from typing import Protocol

from ainspector.core.fingerprint import extract_marker, function_fingerprint
from ainspector.models import ExtractedFunction


class _HasBody(Protocol):
    @property
    def body(self) -> str: ...


class ReviewTracker:
    """Set of fingerprints already reviewed, rebuilt from posted comment markers.

    Populate once with :meth:`load_from_comments`, then query.
    """

    def __init__(self) -> None:
        self._reviewed: set[str] = set()

    def load_from_comments(self, comments: Iterable[_HasBody]) -> None:
        for comment in comments:
            found = extract_marker(comment.body)
            if found is not None:
                self._reviewed.add(found)

    def is_reviewed(self, fn: ExtractedFunction) -> bool:
        return function_fingerprint(fn) in self._reviewed

    def filter_unreviewed(self, functions: Sequence[ExtractedFunction]) -> list[ExtractedFunction]:
        return [fn for fn in functions if not self.is_reviewed(fn)]

    def reviewed_count(self) -> int:
        return len(self._reviewed)
