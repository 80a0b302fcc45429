from pulumi_azure_native import insights, resources, storage, web
import pulumi
import helpers

config = pulumi.Config("dpm")
base_name = config.require("baseName")
window = helpers.access_window(config)

# Create an Azure Resource Group
resource_group = resources.ResourceGroup(f"{base_name}-rg-",
                                         location=config.get("location") or "eastus")

# storage account names must be lowercase
storage_account = storage.StorageAccount(base_name.lower(),
                                         resource_group_name=resource_group.name,
                                         kind=storage.Kind.STORAGE_V2,
                                         sku=storage.SkuArgs(
                                             name=storage.SkuName.STANDARD_LRS))

app_service_plan = web.AppServicePlan(f"{base_name}-asp-",
                                      resource_group_name=resource_group.name,
                                      kind="App",
                                      sku=web.SkuDescriptionArgs(
                                          name="S1",
                                          tier="Standard",
                                          size="S1",
                                          family="S",
                                          capacity=1))

# private container holding the deployment packages
container = storage.BlobContainer("zips",
    account_name=storage_account.name,
    public_access=storage.PublicAccess.NONE,
    resource_group_name=resource_group.name)

api_blob = storage.Blob(f"{base_name}-api",
    resource_group_name=resource_group.name,
    account_name=storage_account.name,
    container_name=container.name,
    type=storage.BlobType.BLOCK,
    source=pulumi.FileArchive(config.require("apiDistPath")))
api_sas_url = helpers.signed_blob_read_url(api_blob, container, storage_account, resource_group, window)

app_blob = storage.Blob(f"{base_name}-app",
    resource_group_name=resource_group.name,
    account_name=storage_account.name,
    container_name=container.name,
    type=storage.BlobType.BLOCK,
    source=pulumi.FileArchive(config.require("appDistPath")))
app_sas_url = helpers.signed_blob_read_url(app_blob, container, storage_account, resource_group, window)

app_insights = insights.Component(f"{base_name}-appi-",
    application_type=insights.ApplicationType.WEB,
    kind="web",
    resource_group_name=resource_group.name)

web_api = web.WebApp(f"{base_name}-webapi-",
    resource_group_name=resource_group.name,
    server_farm_id=app_service_plan.id,
    site_config=web.SiteConfigArgs(
        app_settings=[
            web.NameValuePairArgs(name="WEBSITE_RUN_FROM_PACKAGE", value=api_sas_url),
            web.NameValuePairArgs(name="APPLICATIONINSIGHTS_CONNECTION_STRING", value=app_insights.connection_string),
        ],
        always_on=True,
        net_framework_version="v5.0",
    ))

web_app = web.WebApp(f"{base_name}-webapp-",
    resource_group_name=resource_group.name,
    server_farm_id=app_service_plan.id,
    site_config=web.SiteConfigArgs(
        app_settings=[
            web.NameValuePairArgs(name="WEBSITE_RUN_FROM_PACKAGE", value=app_sas_url),
            web.NameValuePairArgs(name="APPLICATIONINSIGHTS_CONNECTION_STRING", value=app_insights.connection_string),
            web.NameValuePairArgs(name="API_URI", value=pulumi.Output.format("https://{0}/WeatherForecast", web_api.default_host_name)),
        ],
        always_on=True,
        net_framework_version="v5.0",
    ))

pulumi.log.info(f"package urls valid from {window.not_before_utc.isoformat()} until {window.not_after_utc.isoformat()}")

# Export the Stack outputs
pulumi.export("ApiHost", pulumi.Output.format("https://{0}/swagger", web_api.default_host_name))
pulumi.export("AppHost", pulumi.Output.format("https://{0}/Index.html", web_app.default_host_name))
pulumi.export("ResourceGroupName", resource_group.name)
