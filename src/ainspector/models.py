from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

ANONYMOUS_FUNCTION = "<anonymous>"

FileStatus = Literal["added", "modified", "deleted", "renamed"]
ChangeType = Literal["added", "modified"]


class ModifiedLines(BaseModel):
    """Line-level change facts for one file's patch.

    ``added`` holds new-file line numbers, ``deleted`` holds old-file line
    numbers, both in the order their hunks were encountered.
    """

    model_config = ConfigDict(frozen=True)

    added: tuple[int, ...] = ()
    deleted: tuple[int, ...] = ()

    def has_modified_line_in_range(self, start_line: int, end_line: int) -> bool:
        return any(start_line <= line <= end_line for line in self.added)


class FunctionBoundary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ANONYMOUS_FUNCTION
    start_line: int
    end_line: int
    content: str

    @model_validator(mode="after")
    def _check_span(self) -> "FunctionBoundary":
        if self.start_line > self.end_line:
            raise ValueError(f"start_line {self.start_line} is after end_line {self.end_line}")
        return self


class ExtractedFunction(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    start_line: int
    end_line: int
    content: str
    diff: str
    file_path: str
    language: str
    change_type: ChangeType


class ModifiedFile(BaseModel):
    path: str
    status: FileStatus
    patch: str = ""
    content: str | None = None
    old_path: str | None = None


class ExistingComment(BaseModel):
    path: str = ""
    line: int = 0
    body: str


class ReviewComment(BaseModel):
    path: str
    line: int
    body: str
