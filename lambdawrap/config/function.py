"""
Function configuration.

FunctionSpec is the single, immutable description of the Lambda function that
a LambdaManager deploys. It is validated eagerly: an invalid spec never
reaches the provider.
"""

from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from lambdawrap.errors import ConfigurationError


DEFAULT_DESCRIPTION = "Deployed with LambdaWrap"

MIN_MEMORY_SIZE = 128
MAX_MEMORY_SIZE = 1536
MEMORY_SIZE_STEP = 64

SUPPORTED_RUNTIMES = (
    "python3.9",
    "python3.10",
    "python3.11",
    "python3.12",
    "python3.13",
    "nodejs18.x",
    "nodejs20.x",
    "nodejs22.x",
    "java11",
    "java17",
    "java21",
    "dotnet8",
    "ruby3.2",
    "ruby3.3",
    "provided.al2",
    "provided.al2023",
)

# Runtimes AWS no longer accepts for new deployments, with the reason shown
# to the user.
DEPRECATED_RUNTIMES = {
    "nodejs": "AWS Lambda Runtime NodeJS v0.10.42 is deprecated as of April 2017.",
    "nodejs4.3": "AWS Lambda Runtime nodejs4.3 is deprecated.",
    "nodejs4.3-edge": "AWS Lambda Runtime nodejs4.3-edge is deprecated.",
    "nodejs6.10": "AWS Lambda Runtime nodejs6.10 is deprecated.",
    "nodejs16.x": "AWS Lambda Runtime nodejs16.x is deprecated.",
    "java8": "AWS Lambda Runtime java8 is deprecated, use java11 or later.",
    "python2.7": "AWS Lambda Runtime python2.7 is deprecated, use python3.9 or later.",
    "python3.6": "AWS Lambda Runtime python3.6 is deprecated, use python3.9 or later.",
    "python3.7": "AWS Lambda Runtime python3.7 is deprecated, use python3.9 or later.",
    "python3.8": "AWS Lambda Runtime python3.8 is deprecated, use python3.9 or later.",
    "dotnetcore1.0": "AWS Lambda Runtime dotnetcore1.0 is deprecated, use dotnet8.",
}


class FunctionSpec(BaseModel):
    """
    Declarative configuration for one Lambda function.

    Instances are frozen: build one per deployment and share it freely.

    Example:
        spec = FunctionSpec(
            lambda_name="orders-api",
            handler="orders.handler",
            role_arn="arn:aws:iam::123456789012:role/orders-lambda",
            path_to_zip_file="build/orders.zip",
            runtime="python3.12",
            memory_size=256,
        )
    """

    lambda_name: str = Field(
        ...,
        pattern=r"^[A-Za-z0-9_-]{1,64}$",
        description="Function name (1-64 letters, digits, hyphens or underscores)",
    )
    handler: str = Field(
        ...,
        min_length=1,
        description="Function within your code that Lambda calls to begin execution",
    )
    role_arn: str = Field(
        ...,
        min_length=1,
        description="ARN of the IAM role the function assumes when it executes",
    )
    path_to_zip_file: Path = Field(
        ...,
        description="Path to the deployment package zip file",
    )
    runtime: str = Field(..., description="Lambda runtime identifier")
    description: str = Field(
        DEFAULT_DESCRIPTION,
        description="Short, user-defined function description",
    )
    timeout: int = Field(
        30,
        ge=1,
        le=900,
        description="Execution time in seconds after which Lambda stops the function",
    )
    memory_size: int = Field(
        MIN_MEMORY_SIZE,
        description="Memory in MB; a multiple of 64 between 128 and 1536",
    )
    subnet_ids: tuple[str, ...] = Field(
        (),
        description="VPC subnet IDs (requires security_group_ids)",
    )
    security_group_ids: tuple[str, ...] = Field(
        (),
        description="VPC security group IDs (requires subnet_ids)",
    )
    delete_unreferenced_versions: bool = Field(
        True,
        description="Delete versions no alias points to after deploy and teardown",
    )

    class Config:
        frozen = True
        extra = "forbid"

    @field_validator("runtime")
    @classmethod
    def _check_runtime(cls, value: str) -> str:
        if value in DEPRECATED_RUNTIMES:
            raise ValueError(DEPRECATED_RUNTIMES[value])
        if value not in SUPPORTED_RUNTIMES:
            raise ValueError(
                f"Invalid Runtime specified: {value}. "
                f"Only accepts: {', '.join(SUPPORTED_RUNTIMES)}"
            )
        return value

    @field_validator("memory_size")
    @classmethod
    def _check_memory_size(cls, value: int) -> int:
        if (
            value % MEMORY_SIZE_STEP != 0
            or value < MIN_MEMORY_SIZE
            or value > MAX_MEMORY_SIZE
        ):
            raise ValueError(
                f"Invalid Memory Size: {value}. Must be a multiple of "
                f"{MEMORY_SIZE_STEP} between {MIN_MEMORY_SIZE} and {MAX_MEMORY_SIZE}."
            )
        return value

    @model_validator(mode="after")
    def _check_vpc_config(self) -> "FunctionSpec":
        if bool(self.subnet_ids) != bool(self.security_group_ids):
            raise ValueError(
                "Must supply values for BOTH Subnet Ids and Security Group ID "
                "if VPC is desired."
            )
        return self

    @property
    def has_vpc_config(self) -> bool:
        return bool(self.subnet_ids)

    def vpc_config(self) -> dict[str, list[str]] | None:
        """Network placement in provider shape, or None without a VPC."""
        if not self.has_vpc_config:
            return None
        return {
            "SubnetIds": list(self.subnet_ids),
            "SecurityGroupIds": list(self.security_group_ids),
        }

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "FunctionSpec":
        """
        Build a spec from a plain options mapping.

        Missing optional fields take their defaults. Validation failures are
        reported as a single ConfigurationError listing every problem.

        Raises:
            ConfigurationError: If any option is missing or invalid
        """
        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            errors = configuration_errors(e)
            if len(errors) == 1:
                raise errors[0] from None
            raise ConfigurationError(
                "Invalid function configuration:\n"
                + "\n".join(f"  - {err}" for err in errors)
            ) from None

    def __repr__(self) -> str:
        return (
            f"FunctionSpec(name='{self.lambda_name}', runtime='{self.runtime}', "
            f"memory={self.memory_size}MB, timeout={self.timeout}s)"
        )


def check_function_options(options: Mapping[str, Any]) -> list[ConfigurationError]:
    """
    Validate function options without raising.

    Returns:
        One ConfigurationError per problem found; empty when the options
        describe a valid FunctionSpec.
    """
    try:
        FunctionSpec.model_validate(dict(options))
    except ValidationError as e:
        return configuration_errors(e)
    return []


def configuration_errors(error: ValidationError) -> list[ConfigurationError]:
    errors = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"]) or None
        message = detail["msg"]
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if field:
            message = f"{field}: {message}"
        errors.append(ConfigurationError(message, field=field))
    return errors
