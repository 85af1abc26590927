from ainspector.providers.git import GitChangesetProvider
from ainspector.providers.memory import InMemoryChangesetProvider

__all__ = [
    "GitChangesetProvider",
    "InMemoryChangesetProvider",
]
