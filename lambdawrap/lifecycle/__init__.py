"""
Function lifecycle: deploy, alias, clean up.
"""

from lambdawrap.lifecycle.aliases import AliasManager, DEFAULT_ALIAS_DESCRIPTION
from lambdawrap.lifecycle.manager import DeploymentResult, LambdaManager, TeardownResult
from lambdawrap.lifecycle.package import load_deployment_package
from lambdawrap.lifecycle.pagination import iter_pages, paginate
from lambdawrap.lifecycle.resolver import resolve_function
from lambdawrap.lifecycle.versions import (
    CleanupReport,
    VersionGarbageCollector,
    unreferenced_versions,
)

__all__ = [
    "AliasManager",
    "DEFAULT_ALIAS_DESCRIPTION",
    "DeploymentResult",
    "LambdaManager",
    "TeardownResult",
    "load_deployment_package",
    "iter_pages",
    "paginate",
    "resolve_function",
    "CleanupReport",
    "VersionGarbageCollector",
    "unreferenced_versions",
]
