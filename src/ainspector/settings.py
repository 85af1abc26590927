import os
from fnmatch import fnmatchcase

from pydantic import BaseModel


class Settings(BaseModel):
    ignore: tuple[str, ...] = ()
    log_level: str = "WARNING"

    def should_ignore(self, path: str) -> bool:
        """Match ``path`` against the ignore globs.

        A pattern ending in ``/`` ignores everything below that directory; any
        other pattern is matched against the full path and then the basename.
        """
        normalized = path.replace("\\", "/")
        basename = normalized.rsplit("/", 1)[-1]
        for raw_pattern in self.ignore:
            pattern = raw_pattern.replace("\\", "/")
            if pattern.endswith("/"):
                directory = pattern.rstrip("/")
                if normalized == directory or normalized.startswith(directory + "/"):
                    return True
                if fnmatchcase(normalized, directory + "/*"):
                    return True
                continue
            if fnmatchcase(normalized, pattern) or fnmatchcase(basename, pattern):
                return True
        return False


def _split_patterns(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_settings() -> Settings:
    return Settings(
        ignore=_split_patterns(os.getenv("AINSPECTOR_IGNORE", "")),
        log_level=os.getenv("AINSPECTOR_LOG_LEVEL", "WARNING").upper(),
    )
