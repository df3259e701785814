"""
Base provider abstraction for function hosting platforms.

The lifecycle code (manager, alias manager, garbage collector) only talks to
a FunctionHostingProvider. Implementations translate these calls to a
concrete API and translate its failures into lambdawrap errors:

- a missing resource raises ResourceNotFoundError
- any other failure raises ProviderError
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a list call and the cursor for the next one."""

    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None


class FunctionDetails(BaseModel):
    """Current configuration of a function as reported by the provider."""

    function_name: str
    function_arn: str | None = None
    runtime: str | None = None
    handler: str | None = None
    role: str | None = None
    description: str | None = None
    timeout: int | None = None
    memory_size: int | None = None
    version: str | None = None
    last_modified: str | None = None
    code_sha256: str | None = None
    vpc_config: dict[str, Any] | None = None


class AliasRecord(BaseModel):
    """An alias and the version it points at."""

    name: str
    function_version: str
    description: str | None = None
    arn: str | None = None


class FunctionHostingProvider(ABC):
    """
    Operations the lifecycle code needs from a hosting platform.

    Every call is a blocking round trip. Version identifiers are opaque
    strings issued by the provider.
    """

    @abstractmethod
    def get_function(self, name: str) -> FunctionDetails:
        """
        Fetch the function's configuration.

        Raises:
            ResourceNotFoundError: If the function does not exist
        """
        pass

    @abstractmethod
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
        """Create the function and return the published version."""
        pass

    @abstractmethod
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
        """Push configuration fields. Does not publish a version."""
        pass

    @abstractmethod
    def update_function_code(
        self, name: str, zip_file: bytes, publish: bool = True
    ) -> str:
        """Push new code and return the published version."""
        pass

    @abstractmethod
    def delete_function(self, name: str, qualifier: str | None = None) -> None:
        """Delete one version, or the whole function when qualifier is None."""
        pass

    @abstractmethod
    def list_versions(self, name: str, cursor: str | None = None) -> Page[str]:
        """List one page of published versions."""
        pass

    @abstractmethod
    def list_aliases(self, name: str, cursor: str | None = None) -> Page[AliasRecord]:
        """List one page of aliases."""
        pass

    @abstractmethod
    def create_alias(
        self, name: str, alias_name: str, version: str, description: str
    ) -> AliasRecord:
        pass

    @abstractmethod
    def update_alias(
        self, name: str, alias_name: str, version: str, description: str
    ) -> AliasRecord:
        pass

    @abstractmethod
    def delete_alias(self, name: str, alias_name: str) -> None:
        pass

    @abstractmethod
    def get_provider_type(self) -> str:
        """Return provider type."""
        pass
