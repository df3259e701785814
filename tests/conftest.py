"""
Shared fixtures: an in-memory function hosting provider.
"""

import pytest

from lambdawrap.config.function import FunctionSpec
from lambdawrap.errors import ProviderError, ResourceNotFoundError
from lambdawrap.lifecycle.manager import LambdaManager
from lambdawrap.providers.base import (
    AliasRecord,
    FunctionDetails,
    FunctionHostingProvider,
    Page,
)


class FakeLambdaProvider(FunctionHostingProvider):
    """
    In-memory stand-in for the Lambda API.

    Versions are issued as "1", "2", ... per function. List calls return
    ``page_size`` items per page with the offset as cursor. Every call is
    recorded in ``calls`` as ``(operation, kwargs)``.
    """

    def __init__(self, page_size: int = 2):
        self.page_size = page_size
        self.functions: dict[str, FunctionDetails] = {}
        self.versions: dict[str, list[str]] = {}
        self.aliases: dict[str, dict[str, AliasRecord]] = {}
        self.code: dict[str, bytes] = {}
        self.calls: list[tuple[str, dict]] = []
        self.failing_versions: set[str] = set()
        self._issued: dict[str, int] = {}

    def seed(self, name: str, versions=(), aliases=None, **details):
        """Put an existing function with versions and aliases in place."""
        self.functions[name] = FunctionDetails(function_name=name, **details)
        self.versions[name] = list(versions)
        self.aliases[name] = {
            alias_name: AliasRecord(name=alias_name, function_version=version)
            for alias_name, version in (aliases or {}).items()
        }
        self._issued[name] = max((int(v) for v in versions), default=0)

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    def calls_to(self, operation: str) -> list[dict]:
        return [kwargs for op, kwargs in self.calls if op == operation]

    def _record(self, operation: str, **kwargs):
        self.calls.append((operation, kwargs))

    def _require(self, name: str, operation: str):
        if name not in self.functions:
            raise ResourceNotFoundError(
                f"Function not found: {name}",
                operation=operation,
                code="ResourceNotFoundException",
            )

    def _publish(self, name: str) -> str:
        self._issued[name] = self._issued.get(name, 0) + 1
        version = str(self._issued[name])
        self.versions[name].append(version)
        return version

    def _page(self, items: list, cursor: str | None) -> Page:
        start = int(cursor) if cursor else 0
        end = start + self.page_size
        next_cursor = str(end) if end < len(items) else None
        return Page(items=items[start:end], next_cursor=next_cursor)

    def get_function(self, name):
        self._record("get_function", name=name)
        self._require(name, "GetFunction")
        return self.functions[name]

    def create_function(
        self,
        name,
        runtime,
        role,
        handler,
        zip_file,
        description,
        timeout,
        memory_size,
        vpc_config=None,
        publish=True,
    ):
        self._record(
            "create_function",
            name=name,
            runtime=runtime,
            role=role,
            handler=handler,
            description=description,
            timeout=timeout,
            memory_size=memory_size,
            vpc_config=vpc_config,
            publish=publish,
        )
        self.functions[name] = FunctionDetails(
            function_name=name,
            runtime=runtime,
            handler=handler,
            role=role,
            description=description,
            timeout=timeout,
            memory_size=memory_size,
            vpc_config=vpc_config,
        )
        self.versions[name] = []
        self.aliases[name] = {}
        self.code[name] = zip_file
        return self._publish(name) if publish else "$LATEST"

    def update_function_configuration(
        self, name, role, handler, description, timeout, memory_size, vpc_config, runtime
    ):
        self._record(
            "update_function_configuration",
            name=name,
            role=role,
            handler=handler,
            description=description,
            timeout=timeout,
            memory_size=memory_size,
            vpc_config=vpc_config,
            runtime=runtime,
        )
        self._require(name, "UpdateFunctionConfiguration")
        self.functions[name] = self.functions[name].model_copy(
            update={
                "role": role,
                "handler": handler,
                "description": description,
                "timeout": timeout,
                "memory_size": memory_size,
                "vpc_config": vpc_config,
                "runtime": runtime,
            }
        )

    def update_function_code(self, name, zip_file, publish=True):
        self._record("update_function_code", name=name, publish=publish)
        self._require(name, "UpdateFunctionCode")
        self.code[name] = zip_file
        return self._publish(name) if publish else "$LATEST"

    def delete_function(self, name, qualifier=None):
        self._record("delete_function", name=name, qualifier=qualifier)
        self._require(name, "DeleteFunction")
        if qualifier is None:
            del self.functions[name]
            del self.versions[name]
            del self.aliases[name]
            return
        if qualifier in self.failing_versions:
            raise ProviderError(
                f"DeleteFunction failed: throttled deleting {qualifier}",
                operation="DeleteFunction",
                code="TooManyRequestsException",
            )
        if qualifier not in self.versions[name]:
            raise ResourceNotFoundError(
                f"Version not found: {qualifier}",
                operation="DeleteFunction",
                code="ResourceNotFoundException",
            )
        self.versions[name].remove(qualifier)

    def list_versions(self, name, cursor=None):
        self._record("list_versions", name=name, cursor=cursor)
        self._require(name, "ListVersionsByFunction")
        return self._page(self.versions[name], cursor)

    def list_aliases(self, name, cursor=None):
        self._record("list_aliases", name=name, cursor=cursor)
        self._require(name, "ListAliases")
        return self._page(list(self.aliases[name].values()), cursor)

    def create_alias(self, name, alias_name, version, description):
        self._record(
            "create_alias", name=name, alias_name=alias_name, version=version, description=description
        )
        self._require(name, "CreateAlias")
        if alias_name in self.aliases[name]:
            raise ProviderError(
                f"Alias already exists: {alias_name}",
                operation="CreateAlias",
                code="ResourceConflictException",
            )
        alias = AliasRecord(name=alias_name, function_version=version, description=description)
        self.aliases[name][alias_name] = alias
        return alias

    def update_alias(self, name, alias_name, version, description):
        self._record(
            "update_alias", name=name, alias_name=alias_name, version=version, description=description
        )
        self._require(name, "UpdateAlias")
        if alias_name not in self.aliases[name]:
            raise ResourceNotFoundError(
                f"Alias not found: {alias_name}",
                operation="UpdateAlias",
                code="ResourceNotFoundException",
            )
        alias = AliasRecord(name=alias_name, function_version=version, description=description)
        self.aliases[name][alias_name] = alias
        return alias

    def delete_alias(self, name, alias_name):
        self._record("delete_alias", name=name, alias_name=alias_name)
        self._require(name, "DeleteAlias")
        if alias_name not in self.aliases[name]:
            raise ResourceNotFoundError(
                f"Alias not found: {alias_name}",
                operation="DeleteAlias",
                code="ResourceNotFoundException",
            )
        del self.aliases[name][alias_name]

    def get_provider_type(self) -> str:
        return "fake"


@pytest.fixture
def provider():
    """In-memory provider with two items per page."""
    return FakeLambdaProvider(page_size=2)


@pytest.fixture
def package_file(tmp_path):
    """A deployment package on disk."""
    path = tmp_path / "package.zip"
    path.write_bytes(b"PK\x03\x04fake-deployment-package")
    return path


@pytest.fixture
def function_options(package_file):
    return {
        "lambda_name": "orders-api",
        "handler": "orders.handler",
        "role_arn": "arn:aws:iam::123456789012:role/orders-lambda",
        "path_to_zip_file": str(package_file),
        "runtime": "python3.12",
    }


@pytest.fixture
def spec(function_options):
    return FunctionSpec(**function_options)


@pytest.fixture
def manager(spec, provider):
    return LambdaManager(spec, provider)
