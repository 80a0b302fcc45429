import logging
from typing import Protocol

from azure.storage.blob import ContainerSasPermissions, generate_container_sas
from pulumi_azure_native import storage

from signing.models import SasRequest

ARM_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class AuthorizationService(Protocol):
    """Anything able to exchange a SasRequest for a signed access token."""

    def issue_token(self, request: SasRequest) -> str:
        ...


class ArmAuthorizationService:
    """Issues service sas tokens through the resource manager listServiceSas action.

    This is what a deployment uses: the caller's deployment identity needs
    list keys rights on the storage account, no key ever leaves azure.
    """

    def __init__(self, resource_group_name: str):
        self.resource_group_name = resource_group_name

    def issue_token(self, request: SasRequest) -> str:
        logging.info(f"requesting service sas for `{request.canonicalized_resource}` from resource manager")
        result = storage.list_storage_account_service_sas(
            account_name=request.account_name,
            resource_group_name=self.resource_group_name,
            protocols=storage.HttpProtocol(request.protocol),
            shared_access_start_time=request.window.not_before_utc.strftime(ARM_TIME_FORMAT),
            shared_access_expiry_time=request.window.not_after_utc.strftime(ARM_TIME_FORMAT),
            resource=storage.SignedResource(request.resource),
            permissions=storage.Permissions(request.permissions),
            canonicalized_resource=request.canonicalized_resource,
            content_type=request.headers.content_type,
            cache_control=request.headers.cache_control,
            content_disposition=request.headers.content_disposition,
            content_encoding=request.headers.content_encoding,
        )
        return result.service_sas_token


class AccountKeyAuthorizationService:
    """Signs container sas tokens locally with a storage account key."""

    def __init__(self, account_key: str):
        self.account_key = account_key

    def issue_token(self, request: SasRequest) -> str:
        logging.info(f"signing container sas for `{request.canonicalized_resource}` with account key")
        return generate_container_sas(
            account_name=request.account_name,
            container_name=request.container_name,
            account_key=self.account_key,
            permission=ContainerSasPermissions.from_string(request.permissions),
            start=request.window.not_before_utc,
            expiry=request.window.not_after_utc,
            protocol=request.protocol,
            cache_control=request.headers.cache_control,
            content_disposition=request.headers.content_disposition,
            content_encoding=request.headers.content_encoding,
            content_type=request.headers.content_type,
        )
