"""Exceptions raised by BlogMirror."""


class BlogMirrorError(Exception):
    """Base class for all BlogMirror errors."""


class RemoteFetchError(BlogMirrorError):
    """The remote blogging API returned a non-success response or was unreachable."""

    def __init__(self, url: str, status_code: int | None = None, detail: str | None = None) -> None:
        self.url = url
        self.status_code = status_code
        message = f"Failed to fetch {url}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class StoreConstraintViolation(BlogMirrorError):
    """A write outside the upsert path violated a uniqueness constraint."""


class NotFoundError(BlogMirrorError):
    """An update, delete or lookup referenced an unknown local id."""

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
