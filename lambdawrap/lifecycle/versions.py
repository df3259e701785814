"""
Garbage collection of function versions no alias points to.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from lambdawrap.errors import ProviderError
from lambdawrap.lifecycle.pagination import paginate
from lambdawrap.providers.base import FunctionHostingProvider

logger = logging.getLogger(__name__)


def unreferenced_versions(
    versions: Iterable[str], referenced: Iterable[str]
) -> list[str]:
    """
    Versions not referenced by any alias.

    Order follows ``versions``; duplicates are dropped.
    """
    referenced = set(referenced)
    result = []
    seen = set()
    for version in versions:
        if version in referenced or version in seen:
            continue
        seen.add(version)
        result.append(version)
    return result


@dataclass
class CleanupReport:
    """Outcome of a cleanup run."""

    function_name: str
    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    """Version -> error message for deletions that failed"""

    @property
    def removed(self) -> int:
        """Number of versions actually deleted."""
        return len(self.deleted)

    @property
    def ok(self) -> bool:
        return not self.failed

    def __repr__(self):
        return (
            f"CleanupReport(function={self.function_name}, "
            f"removed={self.removed}, failed={len(self.failed)})"
        )


class VersionGarbageCollector:
    """
    Deletes every version of a function that no alias points to.

    A version referenced by an alias is never deleted. Deletions are best
    effort: a failure is logged and recorded, and the remaining versions are
    still attempted.
    """

    def __init__(self, provider: FunctionHostingProvider):
        self.provider = provider

    def cleanup(self, function_name: str) -> CleanupReport:
        logger.info("Cleaning up unused function versions for %s.", function_name)
        report = CleanupReport(function_name=function_name)

        versions = paginate(
            lambda cursor: self.provider.list_versions(function_name, cursor)
        )
        if not versions:
            return report

        aliases = paginate(
            lambda cursor: self.provider.list_aliases(function_name, cursor)
        )
        referenced = {alias.function_version for alias in aliases}

        to_delete = unreferenced_versions(versions, referenced)
        if not to_delete:
            logger.info("No unreferenced versions for %s.", function_name)
            return report

        for version in to_delete:
            logger.info("Deleting function version: %s.", version)
            try:
                self.provider.delete_function(function_name, qualifier=version)
            except ProviderError as e:
                logger.warning(
                    "Failed to delete version %s of %s: %s", version, function_name, e
                )
                report.failed[version] = str(e)
            else:
                report.deleted.append(version)

        logger.info("Cleaned up %d version(s) of %s.", report.removed, function_name)
        return report
