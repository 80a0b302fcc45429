import os
import sys
from typing import Callable

import pulumi
from pulumi import Output
from pulumi_azure_native import storage, resources

# Add the directory containing the signing package to the `PYTHONPATH`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from signing.authorization import ArmAuthorizationService, AuthorizationService  # noqa:E402 (module level import not at top of file)
from signing.deriver import derive_read_url  # noqa:E402
from signing.models import AccessWindow, BlobLocator  # noqa:E402

DEFAULT_SAS_START = "2021-01-01"
DEFAULT_SAS_EXPIRY = "2030-01-01"


def access_window(config: pulumi.Config) -> AccessWindow:
  return AccessWindow.from_iso(config.get("sasStart") or DEFAULT_SAS_START,
                               config.get("sasExpiry") or DEFAULT_SAS_EXPIRY)


def signed_blob_read_url(blob: storage.Blob,
                         container: storage.BlobContainer,
                         account: storage.StorageAccount,
                         resource_group: resources.ResourceGroup,
                         window: AccessWindow,
                         authorization_factory: Callable[[str], AuthorizationService] = ArmAuthorizationService) -> Output[str]:

  def _derive(args) -> str:
    blob_name, container_name, account_name, resource_group_name = args
    locator = BlobLocator(account_name, container_name, blob_name)
    return derive_read_url(locator, window, authorization_factory(resource_group_name))

  # the url carries a bearer token
  return Output.secret(
    Output.all(blob.name, container.name, account.name, resource_group.name).apply(_derive))
