from typing import Protocol

from ainspector.models import ExistingComment, ModifiedFile


class ChangesetProvider(Protocol):
    def get_modified_files(self) -> list[ModifiedFile]: ...

    def get_file_content(self, path: str) -> str: ...

    def get_review_comments(self) -> list[ExistingComment]: ...
