"""
AWS provider implementation backed by a boto3 Lambda client.
"""

import logging
from contextlib import contextmanager
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lambdawrap.config.provider import AwsConfig
from lambdawrap.errors import ProviderError, ResourceNotFoundError
from lambdawrap.providers.base import (
    AliasRecord,
    FunctionDetails,
    FunctionHostingProvider,
    Page,
)

logger = logging.getLogger(__name__)

# Pseudo-version for unpublished code; it is never an alias target we manage
# and cannot be deleted on its own.
LATEST_VERSION = "$LATEST"

NOT_FOUND_CODES = ("ResourceNotFoundException",)


@contextmanager
def _translate_errors(operation: str):
    """Re-raise botocore failures as lambdawrap provider errors."""
    try:
        yield
    except ClientError as e:
        error = e.response.get("Error", {})
        code = error.get("Code")
        message = error.get("Message") or str(e)
        if code in NOT_FOUND_CODES:
            raise ResourceNotFoundError(message, operation=operation, code=code) from e
        raise ProviderError(
            f"{operation} failed: {message}", operation=operation, code=code
        ) from e
    except BotoCoreError as e:
        raise ProviderError(f"{operation} failed: {e}", operation=operation) from e


def _alias_record(data: dict[str, Any]) -> AliasRecord:
    return AliasRecord(
        name=data["Name"],
        function_version=data["FunctionVersion"],
        description=data.get("Description"),
        arn=data.get("AliasArn"),
    )


class AWSLambdaProvider(FunctionHostingProvider):
    """
    AWS Lambda provider.

    Example:
        # From explicit configuration
        provider = AWSLambdaProvider.from_config(AwsConfig(region="eu-west-1"))

        # Around an existing client
        provider = AWSLambdaProvider(boto3.client("lambda"))
    """

    def __init__(self, client: Any, wait_for_updates: bool = True):
        """
        Initialize AWS provider.

        Args:
            client: boto3 Lambda client
            wait_for_updates: Block after a configuration update until AWS
                reports it finished. AWS rejects code updates while a
                configuration update is still in progress.
        """
        self.client = client
        self.wait_for_updates = wait_for_updates

    @classmethod
    def from_config(cls, config: AwsConfig | None = None) -> "AWSLambdaProvider":
        """Create a provider with a client built from an AwsConfig."""
        config = config or AwsConfig.from_env()
        with _translate_errors("CreateClient"):
            session = boto3.session.Session(
                profile_name=config.profile, region_name=config.region
            )
            client = session.client("lambda", endpoint_url=config.endpoint_url)
        return cls(client, wait_for_updates=config.wait_for_updates)

    def get_function(self, name: str) -> FunctionDetails:
        with _translate_errors("GetFunction"):
            response = self.client.get_function(FunctionName=name)
        configuration = response["Configuration"]
        return FunctionDetails(
            function_name=configuration["FunctionName"],
            function_arn=configuration.get("FunctionArn"),
            runtime=configuration.get("Runtime"),
            handler=configuration.get("Handler"),
            role=configuration.get("Role"),
            description=configuration.get("Description"),
            timeout=configuration.get("Timeout"),
            memory_size=configuration.get("MemorySize"),
            version=configuration.get("Version"),
            last_modified=configuration.get("LastModified"),
            code_sha256=configuration.get("CodeSha256"),
            vpc_config=configuration.get("VpcConfig"),
        )

    def create_function(
        self,
        name: str,
        runtime: str,
        role: str,
        handler: str,
        zip_file: bytes,
        description: str,
        timeout: int,
        memory_size: int,
        vpc_config: dict[str, list[str]] | None = None,
        publish: bool = True,
    ) -> str:
        kwargs: dict[str, Any] = {
            "FunctionName": name,
            "Runtime": runtime,
            "Role": role,
            "Handler": handler,
            "Code": {"ZipFile": zip_file},
            "Description": description,
            "Timeout": timeout,
            "MemorySize": memory_size,
            "Publish": publish,
        }
        if vpc_config:
            kwargs["VpcConfig"] = vpc_config
        with _translate_errors("CreateFunction"):
            response = self.client.create_function(**kwargs)
        return response["Version"]

    def update_function_configuration(
        self,
        name: str,
        role: str,
        handler: str,
        description: str,
        timeout: int,
        memory_size: int,
        vpc_config: dict[str, list[str]] | None,
        runtime: str,
    ) -> None:
        # Empty lists detach a previously configured VPC
        vpc_config = vpc_config or {"SubnetIds": [], "SecurityGroupIds": []}
        with _translate_errors("UpdateFunctionConfiguration"):
            self.client.update_function_configuration(
                FunctionName=name,
                Role=role,
                Handler=handler,
                Description=description,
                Timeout=timeout,
                MemorySize=memory_size,
                VpcConfig=vpc_config,
                Runtime=runtime,
            )
        if self.wait_for_updates:
            logger.debug("Waiting for configuration update of %s to finish", name)
            with _translate_errors("WaitFunctionUpdated"):
                self.client.get_waiter("function_updated").wait(FunctionName=name)

    def update_function_code(
        self, name: str, zip_file: bytes, publish: bool = True
    ) -> str:
        with _translate_errors("UpdateFunctionCode"):
            response = self.client.update_function_code(
                FunctionName=name, ZipFile=zip_file, Publish=publish
            )
        return response["Version"]

    def delete_function(self, name: str, qualifier: str | None = None) -> None:
        kwargs = {"FunctionName": name}
        if qualifier is not None:
            kwargs["Qualifier"] = qualifier
        with _translate_errors("DeleteFunction"):
            self.client.delete_function(**kwargs)

    def list_versions(self, name: str, cursor: str | None = None) -> Page[str]:
        kwargs = {"FunctionName": name}
        if cursor:
            kwargs["Marker"] = cursor
        with _translate_errors("ListVersionsByFunction"):
            response = self.client.list_versions_by_function(**kwargs)
        versions = [
            v["Version"]
            for v in response.get("Versions", [])
            if v["Version"] != LATEST_VERSION
        ]
        return Page(items=versions, next_cursor=response.get("NextMarker"))

    def list_aliases(self, name: str, cursor: str | None = None) -> Page[AliasRecord]:
        kwargs = {"FunctionName": name}
        if cursor:
            kwargs["Marker"] = cursor
        with _translate_errors("ListAliases"):
            response = self.client.list_aliases(**kwargs)
        aliases = [_alias_record(a) for a in response.get("Aliases", [])]
        return Page(items=aliases, next_cursor=response.get("NextMarker"))

    def create_alias(
        self, name: str, alias_name: str, version: str, description: str
    ) -> AliasRecord:
        with _translate_errors("CreateAlias"):
            response = self.client.create_alias(
                FunctionName=name,
                Name=alias_name,
                FunctionVersion=version,
                Description=description,
            )
        return _alias_record(response)

    def update_alias(
        self, name: str, alias_name: str, version: str, description: str
    ) -> AliasRecord:
        with _translate_errors("UpdateAlias"):
            response = self.client.update_alias(
                FunctionName=name,
                Name=alias_name,
                FunctionVersion=version,
                Description=description,
            )
        return _alias_record(response)

    def delete_alias(self, name: str, alias_name: str) -> None:
        with _translate_errors("DeleteAlias"):
            self.client.delete_alias(FunctionName=name, Name=alias_name)

    def get_provider_type(self) -> str:
        """Return provider type."""
        return "aws"

    def __repr__(self):
        region = getattr(getattr(self.client, "meta", None), "region_name", None)
        return f"AWSLambdaProvider(region={region})"
