"""
Lambda lifecycle orchestration.

LambdaManager deploys one function to named environments:

    deploy(env)    create or update the function, publish a version, point
                   the environment's alias at it, optionally clean up
    teardown(env)  remove the environment's alias, optionally clean up
    delete()       remove the function with all versions and aliases
"""

import logging
from dataclasses import dataclass

from lambdawrap.config.function import FunctionSpec
from lambdawrap.core.environment import Environment
from lambdawrap.errors import ClientNotInitializedError
from lambdawrap.lifecycle.aliases import AliasManager
from lambdawrap.lifecycle.package import load_deployment_package
from lambdawrap.lifecycle.resolver import resolve_function
from lambdawrap.lifecycle.versions import CleanupReport, VersionGarbageCollector
from lambdawrap.providers.base import AliasRecord, FunctionHostingProvider

logger = logging.getLogger(__name__)


@dataclass
class DeploymentResult:
    """Outcome of a deploy."""

    function_name: str
    environment: str
    version: str
    alias: AliasRecord
    created: bool
    """True if the function did not exist before this deploy"""
    cleanup: CleanupReport | None = None


@dataclass
class TeardownResult:
    """Outcome of a teardown."""

    function_name: str
    environment: str
    alias_removed: bool
    cleanup: CleanupReport | None = None


class LambdaManager:
    """
    Manages the deployment lifecycle of one Lambda function.

    Configuration is front-loaded into an immutable FunctionSpec so that
    deployments stay declarative.

    Example:
        spec = FunctionSpec.from_options({...})
        manager = LambdaManager(spec, AWSLambdaProvider.from_config())

        manager.deploy(Environment("staging", "Pre-production"))
        manager.teardown(Environment("staging"))
    """

    def __init__(
        self,
        spec: FunctionSpec,
        provider: FunctionHostingProvider | None = None,
    ):
        """
        Initialize the manager.

        Args:
            spec: Function configuration
            provider: Hosting provider connection. May be supplied later
                with connect(); lifecycle operations fail until it is.
        """
        self.spec = spec
        self.provider = provider

    def connect(self, provider: FunctionHostingProvider) -> "LambdaManager":
        """Attach a provider connection."""
        self.provider = provider
        return self

    @property
    def function_name(self) -> str:
        return self.spec.lambda_name

    def deploy(
        self,
        environment: Environment,
        cleanup: bool | None = None,
    ) -> DeploymentResult:
        """
        Deploy the function to an environment.

        Creates the function if it does not exist. Otherwise updates its
        configuration, then its code, publishing a new version. The alias
        named after the environment is then pointed at that version. The
        alias is the last thing changed, so any earlier failure leaves the
        environment on its previous version.

        Args:
            environment: Target environment
            cleanup: Override FunctionSpec.delete_unreferenced_versions

        Returns:
            DeploymentResult with the published version and alias

        Raises:
            ClientNotInitializedError: If no provider is connected
            MissingArtifactError: If the deployment package is missing
            ProviderError: If a provider call fails
        """
        provider = self._require_provider()

        logger.info(
            "Deploying Lambda: %s to Environment: %s", self.function_name, environment.name
        )

        zip_file = load_deployment_package(self.spec.path_to_zip_file)

        details = resolve_function(provider, self.function_name)
        if details is None:
            version = self._create(provider, zip_file)
        else:
            self._update_configuration(provider)
            version = self._update_code(provider, zip_file)

        alias = AliasManager(provider).upsert(
            self.function_name, version, environment.name, environment.description
        )

        result = DeploymentResult(
            function_name=self.function_name,
            environment=environment.name,
            version=version,
            alias=alias,
            created=details is None,
        )

        if self._should_cleanup(cleanup):
            result.cleanup = VersionGarbageCollector(provider).cleanup(self.function_name)

        logger.info("Lambda: %s successfully deployed!", self.function_name)
        return result

    def teardown(
        self,
        environment: Environment,
        cleanup: bool | None = None,
    ) -> TeardownResult:
        """
        Tear down an environment.

        Deletes the alias named after the environment, then the versions no
        alias points to if cleanup is enabled. Tearing down an environment
        that has no alias is a no-op.

        Raises:
            ClientNotInitializedError: If no provider is connected
            ResourceNotFoundError: If the function itself does not exist
        """
        provider = self._require_provider()

        removed = AliasManager(provider).remove(self.function_name, environment.name)
        result = TeardownResult(
            function_name=self.function_name,
            environment=environment.name,
            alias_removed=removed,
        )

        if self._should_cleanup(cleanup):
            result.cleanup = VersionGarbageCollector(provider).cleanup(self.function_name)

        return result

    def delete(self) -> bool:
        """
        Delete the function with all its versions, code, configuration and
        aliases.

        Returns:
            True if the function was deleted, False if it did not exist
        """
        provider = self._require_provider()

        if resolve_function(provider, self.function_name) is None:
            logger.info("No Lambda to delete.")
            return False

        provider.delete_function(self.function_name)
        logger.info(
            "Lambda %s and all Versions & Aliases have been deleted.", self.function_name
        )
        return True

    def cleanup_unused_versions(self) -> CleanupReport:
        """Delete every version no alias points to, regardless of delete_unreferenced_versions."""
        provider = self._require_provider()
        return VersionGarbageCollector(provider).cleanup(self.function_name)

    def _require_provider(self) -> FunctionHostingProvider:
        if self.provider is None:
            raise ClientNotInitializedError()
        return self.provider

    def _should_cleanup(self, override: bool | None) -> bool:
        if override is not None:
            return override
        return self.spec.delete_unreferenced_versions

    def _create(self, provider: FunctionHostingProvider, zip_file: bytes) -> str:
        spec = self.spec
        logger.info("Creating New Lambda Function: %s....", spec.lambda_name)
        self._log_configuration()

        version = provider.create_function(
            spec.lambda_name,
            runtime=spec.runtime,
            role=spec.role_arn,
            handler=spec.handler,
            zip_file=zip_file,
            description=spec.description,
            timeout=spec.timeout,
            memory_size=spec.memory_size,
            vpc_config=spec.vpc_config(),
            publish=True,
        )
        logger.info("Successfully created Lambda: %s!", spec.lambda_name)
        return version

    def _update_configuration(self, provider: FunctionHostingProvider) -> None:
        spec = self.spec
        logger.info("Updating Lambda Config for %s...", spec.lambda_name)
        self._log_configuration()

        provider.update_function_configuration(
            spec.lambda_name,
            role=spec.role_arn,
            handler=spec.handler,
            description=spec.description,
            timeout=spec.timeout,
            memory_size=spec.memory_size,
            vpc_config=spec.vpc_config(),
            runtime=spec.runtime,
        )
        logger.info("Successfully updated Lambda configuration for %s", spec.lambda_name)

    def _update_code(self, provider: FunctionHostingProvider, zip_file: bytes) -> str:
        logger.info("Updating Lambda Code for %s....", self.function_name)
        version = provider.update_function_code(
            self.function_name, zip_file, publish=True
        )
        logger.info(
            "Successfully updated Lambda %s code to version: %s", self.function_name, version
        )
        return version

    def _log_configuration(self) -> None:
        spec = self.spec
        logger.info(
            "Runtime Engine: %s, Timeout: %s, Memory Size: %s.",
            spec.runtime,
            spec.timeout,
            spec.memory_size,
        )
        if spec.has_vpc_config:
            logger.info(
                "With VPC Configuration: Subnets: %s, Security Groups: %s",
                list(spec.subnet_ids),
                list(spec.security_group_ids),
            )

    def __repr__(self):
        return f"LambdaManager(function={self.function_name}, provider={self.provider!r})"
