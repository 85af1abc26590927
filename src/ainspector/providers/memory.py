from collections.abc import Mapping, Sequence

from ainspector.errors import ProviderError
from ainspector.models import ExistingComment, ModifiedFile


class InMemoryChangesetProvider:
    """Serve a changeset held entirely in memory."""

    def __init__(
        self,
        files: Sequence[ModifiedFile],
        contents: Mapping[str, str] | None = None,
        comments: Sequence[ExistingComment] = (),
    ) -> None:
        self.files = list(files)
        self.contents = dict(contents or {})
        self.comments = list(comments)

    def get_modified_files(self) -> list[ModifiedFile]:
        return list(self.files)

    def get_file_content(self, path: str) -> str:
        if path in self.contents:
            return self.contents[path]
        for file in self.files:
            if file.path == path and file.content is not None:
                return file.content
        raise ProviderError(f"No content for {path}")

    def get_review_comments(self) -> list[ExistingComment]:
        return list(self.comments)
