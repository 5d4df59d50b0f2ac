"""Error taxonomy for the sync and cleanup runs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class SyncError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(SyncError):
    """Required environment variables are missing or hold unusable values."""

    def __init__(
        self,
        missing: Iterable[str] = (),
        *,
        invalid: Mapping[str, str] | None = None,
    ) -> None:
        self.missing = list(missing)
        self.invalid = dict(invalid or {})
        problems: list[str] = []
        if self.missing:
            problems.append("Missing required environment variables: " + ", ".join(self.missing))
        problems.extend(f"Invalid {name}: {reason}" for name, reason in self.invalid.items())
        super().__init__("; ".join(problems))


class FetchError(SyncError):
    """The initial listing of master records could not be retrieved."""


class RecordValidationError(SyncError):
    """A master record lacks a field needed for routing or correlation."""

    def __init__(self, title: str, missing: Iterable[str]) -> None:
        self.title = title
        self.missing = list(missing)
        super().__init__(f"{title!r} is missing {', '.join(self.missing)}")


class TargetConfigError(SyncError):
    """A resolved public collection has no configured identifier."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No collection id configured for {key}")


class ContentFetchError(SyncError):
    """The nested page content of a master record could not be read."""
