"""
lambdawrap: deployment lifecycle management for AWS Lambda functions.

lambdawrap deploys one function to named environments. Every deploy
publishes an immutable version and points the environment's alias at it;
versions that no alias points to are cleaned up afterwards.

Core concepts:
- FunctionSpec: Immutable, validated configuration of the function
- Environment: A deployment target; one alias per environment
- LambdaManager: deploy / teardown / delete orchestration
- FunctionHostingProvider: The hosting API (AWSLambdaProvider for AWS)

Example:
    from lambdawrap import AWSLambdaProvider, Environment, FunctionSpec, LambdaManager

    spec = FunctionSpec.from_options({
        "lambda_name": "orders-api",
        "handler": "orders.handler",
        "role_arn": "arn:aws:iam::123456789012:role/orders-lambda",
        "path_to_zip_file": "build/orders.zip",
        "runtime": "python3.12",
    })
    manager = LambdaManager(spec, AWSLambdaProvider.from_config())

    manager.deploy(Environment("staging", "Pre-production"))
"""

__version__ = "0.3.0"

from lambdawrap.config import AwsConfig, FunctionSpec, ProjectConfig, load_project
from lambdawrap.core.environment import Environment
from lambdawrap.errors import (
    ClientNotInitializedError,
    ConfigurationError,
    LambdaWrapError,
    MissingArtifactError,
    PreconditionError,
    ProviderError,
    ResourceNotFoundError,
)
from lambdawrap.lifecycle import (
    AliasManager,
    CleanupReport,
    DeploymentResult,
    LambdaManager,
    TeardownResult,
    VersionGarbageCollector,
)
from lambdawrap.providers import AWSLambdaProvider, FunctionHostingProvider

__all__ = [
    "AwsConfig",
    "FunctionSpec",
    "ProjectConfig",
    "load_project",
    "Environment",
    # Errors
    "ClientNotInitializedError",
    "ConfigurationError",
    "LambdaWrapError",
    "MissingArtifactError",
    "PreconditionError",
    "ProviderError",
    "ResourceNotFoundError",
    # Lifecycle
    "AliasManager",
    "CleanupReport",
    "DeploymentResult",
    "LambdaManager",
    "TeardownResult",
    "VersionGarbageCollector",
    # Providers
    "AWSLambdaProvider",
    "FunctionHostingProvider",
]
