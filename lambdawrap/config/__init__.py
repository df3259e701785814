"""
Configuration classes for lambdawrap.
"""

from lambdawrap.config.function import (
    DEFAULT_DESCRIPTION,
    DEPRECATED_RUNTIMES,
    SUPPORTED_RUNTIMES,
    FunctionSpec,
    check_function_options,
)
from lambdawrap.config.provider import AwsConfig
from lambdawrap.config.loader import (
    DEFAULT_PROJECT_FILE,
    EnvironmentConfig,
    ProjectConfig,
    load_project,
    parse_project,
    read_project_file,
)

__all__ = [
    # Function configuration
    "DEFAULT_DESCRIPTION",
    "DEPRECATED_RUNTIMES",
    "SUPPORTED_RUNTIMES",
    "FunctionSpec",
    "check_function_options",
    # Provider configuration
    "AwsConfig",
    # Project files
    "DEFAULT_PROJECT_FILE",
    "EnvironmentConfig",
    "ProjectConfig",
    "load_project",
    "parse_project",
    "read_project_file",
]
