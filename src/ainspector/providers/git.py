import json
import logging
import subprocess
from pathlib import Path

from pydantic import ValidationError

from ainspector.errors import ProviderError
from ainspector.models import ExistingComment, FileStatus, ModifiedFile

logger = logging.getLogger(__name__)

_STATUS_CODES: dict[str, FileStatus] = {
    "A": "added",
    "C": "added",
    "D": "deleted",
    "M": "modified",
    "R": "renamed",
    "T": "modified",
}


class GitChangesetProvider:
    """Read a changeset from a local checkout as the diff ``base...head``.

    Previously posted comments come from an optional JSON file holding a list
    of ``{"path", "line", "body"}`` objects.
    """

    def __init__(
        self,
        repo: str | Path,
        base: str,
        head: str = "HEAD",
        comments_path: str | Path | None = None,
    ) -> None:
        self.repo = Path(repo)
        self.base = base
        self.head = head
        self.comments_path = Path(comments_path) if comments_path else None

    def _run_git(self, args: list[str]) -> str:
        result = subprocess.run(
            ["git", "-C", str(self.repo), *args],
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            raise ProviderError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
        return result.stdout

    @property
    def _range(self) -> str:
        return f"{self.base}...{self.head}"

    def get_modified_files(self) -> list[ModifiedFile]:
        output = self._run_git(["diff", "--name-status", "-M", self._range])
        files: list[ModifiedFile] = []
        for entry in output.splitlines():
            parts = entry.split("\t")
            if len(parts) < 2:
                continue
            status = _STATUS_CODES.get(parts[0][:1])
            if status is None:
                logger.debug("Ignoring git status %s for %s", parts[0], parts[-1])
                continue
            path = parts[-1]
            old_path = parts[1] if len(parts) > 2 else None
            pathspec = [old_path, path] if old_path else [path]
            patch = "" if status == "deleted" else self._run_git(["diff", "-M", self._range, "--", *pathspec])
            files.append(ModifiedFile(path=path, status=status, patch=patch, old_path=old_path))
        return files

    def get_file_content(self, path: str) -> str:
        return self._run_git(["show", f"{self.head}:{path}"])

    def get_review_comments(self) -> list[ExistingComment]:
        if self.comments_path is None:
            return []
        try:
            raw = json.loads(self.comments_path.read_text(encoding="utf-8"))
            return [ExistingComment.model_validate(item) for item in raw]
        except (OSError, ValueError, TypeError, ValidationError) as exc:
            raise ProviderError(f"Cannot read comments from {self.comments_path}: {exc}") from exc
