"""Exception types raised across the newsboard core."""


class NewsboardError(Exception):
    """Base class for all newsboard errors."""


class RegistryError(NewsboardError):
    """The source catalog is inconsistent (duplicate id, unknown kind, ...)."""


class SourceUnavailable(NewsboardError):
    """An upstream endpoint could not be reached or returned garbage."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class AllSourcesFailed(NewsboardError):
    """Every selected source failed, so there is nothing to show or cache."""

    def __init__(self, errors: dict[str, BaseException]):
        names = ", ".join(sorted(errors)) or "none"
        super().__init__(f"all sources failed: {names}")
        self.errors = errors
