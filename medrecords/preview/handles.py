import secrets
from pathlib import Path

from medrecords.logging.logger import Log
from medrecords.preview.exceptions import HandleReleasedError

_SCHEME = "preview://"


class FileHandle:
    """Revocable reference to a file's original bytes, used for preview.

    Consumers only see ``url``; the registry resolves it back to the source
    until the handle is released.
    """

    def __init__(self, registry: "PreviewRegistry", url: str) -> None:
        self._registry = registry
        self.url = url

    @property
    def released(self) -> bool:
        return not self._registry.is_live(self.url)

    def resolve(self) -> Path:
        return self._registry.resolve(self.url)

    def release(self) -> None:
        self._registry.revoke(self.url)

    def __repr__(self) -> str:
        return f"FileHandle({self.url!r})"


class PreviewRegistry:
    """Issues and revokes preview handles."""

    def __init__(self) -> None:
        self._live: dict[str, Path] = {}

    def create(self, path: Path) -> FileHandle:
        url = f"{_SCHEME}{secrets.token_hex(16)}"
        self._live[url] = path
        return FileHandle(self, url)

    def resolve(self, url: str) -> Path:
        try:
            return self._live[url]
        except KeyError:
            raise HandleReleasedError(f"Preview handle {url} has been released") from None

    def revoke(self, url: str) -> None:
        if self._live.pop(url, None) is None:
            raise HandleReleasedError(f"Preview handle {url} already released")
        Log.debug(f"Revoked preview handle {url}")

    def is_live(self, url: str) -> bool:
        return url in self._live

    @property
    def live_count(self) -> int:
        return len(self._live)
