"""
Tests for FunctionSpec validation and defaults.
"""

import pytest
from pydantic import ValidationError

from lambdawrap.config import (
    DEFAULT_DESCRIPTION,
    FunctionSpec,
    check_function_options,
)
from lambdawrap.errors import ConfigurationError


class TestDefaults:
    """Tests for optional fields."""

    def test_defaults_applied(self, function_options):
        """Test optional fields take their defaults."""
        spec = FunctionSpec.from_options(function_options)

        assert spec.description == DEFAULT_DESCRIPTION
        assert spec.timeout == 30
        assert spec.memory_size == 128
        assert spec.subnet_ids == ()
        assert spec.security_group_ids == ()
        assert spec.delete_unreferenced_versions is True

    def test_no_vpc_config_by_default(self, spec):
        """Test a spec without subnets has no VPC config."""
        assert spec.has_vpc_config is False
        assert spec.vpc_config() is None

    def test_vpc_config_shape(self, function_options):
        """Test VPC config is rendered in provider shape."""
        spec = FunctionSpec(
            **function_options,
            subnet_ids=["subnet-1", "subnet-2"],
            security_group_ids=["sg-1"],
        )

        assert spec.vpc_config() == {
            "SubnetIds": ["subnet-1", "subnet-2"],
            "SecurityGroupIds": ["sg-1"],
        }

    def test_spec_is_frozen(self, spec):
        """Test a spec cannot be changed after construction."""
        with pytest.raises(ValidationError):
            spec.memory_size = 256


class TestMemorySize:
    """Tests for memory size validation."""

    @pytest.mark.parametrize("memory_size", [128, 192, 512, 1024, 1536])
    def test_valid_sizes(self, function_options, memory_size):
        """Test multiples of 64 within range are accepted."""
        spec = FunctionSpec(**function_options, memory_size=memory_size)

        assert spec.memory_size == memory_size

    @pytest.mark.parametrize("memory_size", [100, 130, 200, 1000])
    def test_not_multiple_of_64(self, function_options, memory_size):
        """Test sizes that are not multiples of 64 are rejected."""
        with pytest.raises(ValidationError, match="Invalid Memory Size"):
            FunctionSpec(**function_options, memory_size=memory_size)

    @pytest.mark.parametrize("memory_size", [0, 64, 1600, 3008, -128])
    def test_out_of_range(self, function_options, memory_size):
        """Test sizes outside [128, 1536] are rejected."""
        with pytest.raises(ValidationError, match="Invalid Memory Size"):
            FunctionSpec(**function_options, memory_size=memory_size)


class TestVpcValidation:
    """Tests for subnet / security group pairing."""

    def test_only_subnets(self, function_options):
        """Test subnets without security groups are rejected."""
        with pytest.raises(ValidationError, match="BOTH Subnet Ids and Security Group ID"):
            FunctionSpec(**function_options, subnet_ids=["subnet-1"])

    def test_only_security_groups(self, function_options):
        """Test security groups without subnets are rejected."""
        with pytest.raises(ValidationError, match="BOTH Subnet Ids and Security Group ID"):
            FunctionSpec(**function_options, security_group_ids=["sg-1"])

    def test_both_present(self, function_options):
        """Test subnets and security groups together are accepted."""
        spec = FunctionSpec(
            **function_options, subnet_ids=["subnet-1"], security_group_ids=["sg-1"]
        )

        assert spec.has_vpc_config is True


class TestRuntime:
    """Tests for the runtime allow-list."""

    def test_unsupported_runtime(self, function_options):
        """Test an unknown runtime is rejected with the accepted list."""
        options = {**function_options, "runtime": "cobol85"}

        with pytest.raises(ConfigurationError, match="Invalid Runtime specified: cobol85"):
            FunctionSpec.from_options(options)

    @pytest.mark.parametrize("runtime", ["nodejs", "python2.7", "java8"])
    def test_deprecated_runtime(self, function_options, runtime):
        """Test deprecated runtimes are rejected with a deprecation message."""
        options = {**function_options, "runtime": runtime}

        with pytest.raises(ConfigurationError, match="deprecated"):
            FunctionSpec.from_options(options)

    def test_error_names_field(self, function_options):
        """Test the error carries the offending field."""
        options = {**function_options, "runtime": "cobol85"}

        with pytest.raises(ConfigurationError) as exc_info:
            FunctionSpec.from_options(options)

        assert exc_info.value.field == "runtime"
        assert exc_info.value.kind == "configuration"


class TestFromOptions:
    """Tests for the options factory."""

    @pytest.mark.parametrize(
        "missing", ["lambda_name", "handler", "role_arn", "path_to_zip_file", "runtime"]
    )
    def test_required_fields(self, function_options, missing):
        """Test each required field must be provided."""
        options = dict(function_options)
        del options[missing]

        with pytest.raises(ConfigurationError, match=missing):
            FunctionSpec.from_options(options)

    def test_non_string_handler(self, function_options):
        """Test required strings must be strings."""
        options = {**function_options, "handler": 42}

        with pytest.raises(ConfigurationError, match="handler"):
            FunctionSpec.from_options(options)

    def test_invalid_name(self, function_options):
        """Test function names are limited to letters, digits, - and _."""
        options = {**function_options, "lambda_name": "orders api!"}

        with pytest.raises(ConfigurationError, match="lambda_name"):
            FunctionSpec.from_options(options)

    def test_unknown_option(self, function_options):
        """Test unknown options are rejected."""
        options = {**function_options, "memory": 256}

        with pytest.raises(ConfigurationError, match="memory"):
            FunctionSpec.from_options(options)

    def test_multiple_errors_reported_together(self, function_options):
        """Test every problem is listed in one error."""
        options = {**function_options, "memory_size": 100, "runtime": "cobol85"}

        with pytest.raises(ConfigurationError) as exc_info:
            FunctionSpec.from_options(options)

        message = str(exc_info.value)
        assert "memory_size" in message
        assert "runtime" in message


class TestCheckFunctionOptions:
    """Tests for non-raising validation."""

    def test_valid_options(self, function_options):
        """Test valid options produce no errors."""
        assert check_function_options(function_options) == []

    def test_returns_one_error_per_problem(self, function_options):
        """Test each problem becomes a ConfigurationError value."""
        options = {**function_options, "memory_size": 100, "timeout": 0}

        errors = check_function_options(options)

        assert len(errors) == 2
        assert all(isinstance(e, ConfigurationError) for e in errors)
        assert {e.field for e in errors} == {"memory_size", "timeout"}
