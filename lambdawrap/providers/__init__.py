"""
Function hosting providers.
"""

from lambdawrap.providers.base import (
    AliasRecord,
    FunctionDetails,
    FunctionHostingProvider,
    Page,
)
from lambdawrap.providers.aws import AWSLambdaProvider

__all__ = [
    "AliasRecord",
    "FunctionDetails",
    "FunctionHostingProvider",
    "Page",
    "AWSLambdaProvider",
]
