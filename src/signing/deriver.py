import asyncio
import logging
import re

from signing.authorization import AuthorizationService
from signing.errors import InvalidLocator, InvalidWindow, LocatorResolutionFailed
from signing.models import DEFAULT_RESPONSE_HEADERS, AccessWindow, BlobLocator, ResponseHeaders, SasRequest

# azure storage account names: 3-24 lowercase letters and digits
ACCOUNT_NAME_PATTERN = re.compile(r"^[a-z0-9]{3,24}$")


def _validate_locator(locator: BlobLocator):
  for field_name in ("account_name", "container_name", "blob_name"):
    value = getattr(locator, field_name)
    if not isinstance(value, str) or not value.strip():
      raise InvalidLocator(f"{field_name} must be a non-empty string, got {value!r}")

  if not ACCOUNT_NAME_PATTERN.match(locator.account_name):
    raise InvalidLocator(f"`{locator.account_name}` is not a valid storage account name")


def _validate_window(window: AccessWindow):
  if window.not_before_utc >= window.not_after_utc:
    raise InvalidWindow(
      f"access window starts at {window.not_before_utc.isoformat()} but ends at {window.not_after_utc.isoformat()}")


def _build_request(locator: BlobLocator, window: AccessWindow, headers: ResponseHeaders) -> SasRequest:
  return SasRequest(
    account_name=locator.account_name,
    container_name=locator.container_name,
    canonicalized_resource=locator.container_resource,
    window=window,
    headers=headers,
  )


def derive_read_url(locator: BlobLocator,
                    window: AccessWindow,
                    authorization: AuthorizationService,
                    headers: ResponseHeaders = DEFAULT_RESPONSE_HEADERS) -> str:
  """Derives a time limited, read only, https only url for a blob

  A fresh token is requested on every call, nothing is cached. The token is
  scoped to the whole container the blob lives in.

        :param BlobLocator locator:
            The account, container and blob to read.
        :param AccessWindow window:
            When the token is valid.
        :param AuthorizationService authorization:
            Issues the signed access token.
  """
  _validate_locator(locator)
  _validate_window(window)

  request = _build_request(locator, window, headers)
  try:
    token = authorization.issue_token(request)
  except Exception as e:
    logging.error(f"failed to issue token for `{request.canonicalized_resource}`: {e}")
    raise LocatorResolutionFailed(f"could not resolve `{locator.endpoint}`: {e}") from e

  if not token:
    logging.error(f"empty token issued for `{request.canonicalized_resource}`")
    raise LocatorResolutionFailed(f"could not resolve `{locator.endpoint}`: empty token")

  logging.info(f"derived read url for blob `{locator.blob_name}` in `{request.canonicalized_resource}`")
  return f"{locator.endpoint}?{token}"


async def derive_read_url_async(locator: BlobLocator,
                                window: AccessWindow,
                                authorization: AuthorizationService,
                                headers: ResponseHeaders = DEFAULT_RESPONSE_HEADERS) -> str:
  # invalid input fails here, before a worker thread is used
  _validate_locator(locator)
  _validate_window(window)
  return await asyncio.to_thread(derive_read_url, locator, window, authorization, headers)
