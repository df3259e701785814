"""
Project file loading.

A project file is YAML with three sections:

    function:       FunctionSpec options (required)
    aws:            AwsConfig options (optional)
    environments:   environment name -> {description: ...} (optional)

Example:
    function:
      lambda_name: orders-api
      handler: orders.handler
      role_arn: arn:aws:iam::123456789012:role/orders-lambda
      path_to_zip_file: build/orders.zip
      runtime: python3.12
    aws:
      region: eu-west-1
    environments:
      staging:
        description: Pre-production
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from lambdawrap.config.function import FunctionSpec, configuration_errors
from lambdawrap.config.provider import AwsConfig
from lambdawrap.core.environment import Environment
from lambdawrap.errors import ConfigurationError

DEFAULT_PROJECT_FILE = "lambdawrap.yaml"


class EnvironmentConfig(BaseModel):
    """Per-environment settings from the project file."""

    description: str | None = None

    class Config:
        extra = "forbid"


class ProjectConfig(BaseModel):
    """Everything needed to run lambdawrap against one function."""

    function: FunctionSpec
    aws: AwsConfig = Field(default_factory=AwsConfig)
    environments: dict[str, EnvironmentConfig] = Field(default_factory=dict)

    class Config:
        extra = "forbid"

    def environment(self, name: str, description: str | None = None) -> Environment:
        """
        Build an Environment by name.

        An explicit description wins over the one in the project file.
        Environments missing from the file are allowed.
        """
        if description is None and name in self.environments:
            description = self.environments[name].description
        return Environment(name=name, description=description)


def load_project(path: str | Path = DEFAULT_PROJECT_FILE) -> ProjectConfig:
    """
    Load and validate a project file.

    A relative ``function.path_to_zip_file`` is resolved against the
    directory containing the project file.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            describes an invalid configuration
    """
    path = Path(path)
    return parse_project(read_project_file(path), base_dir=path.parent)


def read_project_file(path: str | Path) -> dict[str, Any]:
    """
    Parse a project file without validating it.

    Raises:
        ConfigurationError: If the file is missing or is not a YAML mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Project file not found: {path}")

    try:
        # Undecodable bytes surface as yaml.reader.ReaderError
        with path.open("rb") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Project file {path} must contain a mapping")
    return data


def parse_project(data: dict[str, Any], base_dir: Path | None = None) -> ProjectConfig:
    """Validate an already-parsed project mapping."""
    function = data.get("function")
    if isinstance(function, dict) and base_dir is not None:
        zip_path = function.get("path_to_zip_file")
        if isinstance(zip_path, str) and not Path(zip_path).is_absolute():
            data = {
                **data,
                "function": {**function, "path_to_zip_file": str(base_dir / zip_path)},
            }

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        errors = configuration_errors(e)
        if len(errors) == 1:
            raise errors[0] from None
        raise ConfigurationError(
            "Invalid project configuration:\n"
            + "\n".join(f"  - {err}" for err in errors)
        ) from None
