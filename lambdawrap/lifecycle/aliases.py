"""
Alias management: one alias per environment, pointing at one version.
"""

import logging

from lambdawrap.errors import ResourceNotFoundError
from lambdawrap.lifecycle.pagination import paginate
from lambdawrap.providers.base import AliasRecord, FunctionHostingProvider

logger = logging.getLogger(__name__)

DEFAULT_ALIAS_DESCRIPTION = "Alias managed by LambdaWrap"


class AliasManager:
    """
    Create, repoint and remove aliases of a function.

    Lookups always enumerate every page of aliases; the provider is the
    only source of truth.
    """

    def __init__(self, provider: FunctionHostingProvider):
        self.provider = provider

    def list_aliases(self, function_name: str) -> list[AliasRecord]:
        """Return every alias of the function."""
        return paginate(lambda cursor: self.provider.list_aliases(function_name, cursor))

    def find(self, function_name: str, alias_name: str) -> AliasRecord | None:
        """Return the alias with the given name, or None."""
        for alias in self.list_aliases(function_name):
            if alias.name == alias_name:
                return alias
        return None

    def upsert(
        self,
        function_name: str,
        version: str,
        alias_name: str,
        description: str | None = None,
    ) -> AliasRecord:
        """
        Point ``alias_name`` at ``version``, creating the alias if needed.

        Calling this again with the same arguments leaves a single alias
        pointing at the same version.

        Args:
            function_name: Function owning the alias
            version: Version the alias should point at
            alias_name: Alias name (the environment name)
            description: Alias description; defaults to a generic one

        Returns:
            The alias as reported by the provider
        """
        description = description or DEFAULT_ALIAS_DESCRIPTION
        existing = self.find(function_name, alias_name)

        if existing is None:
            alias = self.provider.create_alias(
                function_name, alias_name, version, description
            )
            logger.info(
                "Created Alias: %s for Lambda: %s v%s.", alias_name, function_name, version
            )
        else:
            alias = self.provider.update_alias(
                function_name, alias_name, version, description
            )
            logger.info(
                "Updated Alias: %s for Lambda: %s from v%s to v%s.",
                alias_name,
                function_name,
                existing.function_version,
                version,
            )
        return alias

    def remove(self, function_name: str, alias_name: str) -> bool:
        """
        Delete an alias by name.

        A missing alias is not an error. A missing function is: the listing
        raises ResourceNotFoundError.

        Returns:
            True if an alias was deleted, False if there was none
        """
        if self.find(function_name, alias_name) is None:
            logger.info("Alias %s does not exist for %s, nothing to delete.", alias_name, function_name)
            return False

        logger.info("Deleting Alias: %s for %s", alias_name, function_name)
        try:
            self.provider.delete_alias(function_name, alias_name)
        except ResourceNotFoundError:
            # Removed by someone else after the listing
            logger.info("Alias %s was already deleted from %s.", alias_name, function_name)
            return False
        return True
