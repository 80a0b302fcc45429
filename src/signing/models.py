from dataclasses import dataclass
from datetime import datetime, timezone

BLOB_ENDPOINT = "https://{0}.blob.core.windows.net/{1}/{2}"
CANONICALIZED_CONTAINER = "/blob/{0}/{1}"


def _as_utc(value: datetime) -> datetime:
    # naive timestamps are taken to already be utc
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class BlobLocator:
    account_name: str
    container_name: str
    blob_name: str

    @property
    def container_resource(self) -> str:
        """The canonicalized resource path a token is scoped to.

        The path stops at the container, so a token issued for it can read
        every blob in that container, not only ``blob_name``.
        """
        return CANONICALIZED_CONTAINER.format(self.account_name, self.container_name)

    @property
    def endpoint(self) -> str:
        return BLOB_ENDPOINT.format(self.account_name, self.container_name, self.blob_name)


@dataclass(frozen=True)
class AccessWindow:
    not_before_utc: datetime
    not_after_utc: datetime

    def __post_init__(self):
        object.__setattr__(self, "not_before_utc", _as_utc(self.not_before_utc))
        object.__setattr__(self, "not_after_utc", _as_utc(self.not_after_utc))

    @classmethod
    def from_iso(cls, start: str, expiry: str) -> "AccessWindow":
        """Builds a window from two ISO-8601 strings

        :param str start:
            First instant the token is valid, e.g. ``2021-01-01``.
        :param str expiry:
            Instant the token stops being valid, e.g. ``2030-01-01``.
        """
        return cls(datetime.fromisoformat(start), datetime.fromisoformat(expiry))


@dataclass(frozen=True)
class ResponseHeaders:
    content_type: str = "application/json"
    cache_control: str = "max-age=5"
    content_disposition: str = "inline"
    content_encoding: str = "deflate"


DEFAULT_RESPONSE_HEADERS = ResponseHeaders()


@dataclass(frozen=True)
class SasRequest:
    account_name: str
    container_name: str
    canonicalized_resource: str
    window: AccessWindow
    headers: ResponseHeaders = DEFAULT_RESPONSE_HEADERS
    # read only, https only, container scoped
    permissions: str = "r"
    protocol: str = "https"
    resource: str = "c"
