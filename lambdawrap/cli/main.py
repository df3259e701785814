"""
lambdawrap CLI - deploy a Lambda function to named environments.
"""

import logging
import sys
from contextlib import contextmanager

import click

from lambdawrap import __version__
from lambdawrap.config.function import check_function_options
from lambdawrap.config.loader import (
    DEFAULT_PROJECT_FILE,
    ProjectConfig,
    load_project,
    parse_project,
    read_project_file,
)
from lambdawrap.config.provider import AwsConfig
from lambdawrap.errors import LambdaWrapError
from lambdawrap.lifecycle.manager import LambdaManager
from lambdawrap.lifecycle.versions import CleanupReport
from lambdawrap.providers.aws import AWSLambdaProvider
from lambdawrap.providers.base import FunctionHostingProvider


@click.group()
@click.version_option(version=__version__, prog_name="lambdawrap")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=DEFAULT_PROJECT_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Project file describing the function",
)
@click.option("--region", help="AWS region (overrides the project file)")
@click.option("--profile", help="AWS profile (overrides the project file)")
@click.option("--endpoint-url", help="Lambda endpoint override, e.g. a local emulator")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx, config_path, region, profile, endpoint_url, verbose):
    """
    lambdawrap - deploy, alias and clean up AWS Lambda functions.

    Each environment (staging, production, ...) is an alias pointing at a
    published version of the function.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        aws_overrides={"region": region, "profile": profile, "endpoint_url": endpoint_url},
        verbose=verbose,
    )


@cli.command()
@click.argument("environment")
@click.option("--description", "-d", help="Alias description for this environment")
@click.option(
    "--cleanup/--no-cleanup",
    default=None,
    help="Delete versions no alias points to (default: from the project file)",
)
@click.pass_context
def deploy(ctx, environment, description, cleanup):
    """
    Deploy the function to ENVIRONMENT.

    Example:
        lambdawrap deploy staging
        lambdawrap -c services/orders.yaml deploy production --no-cleanup
    """
    with _handle_errors(ctx, "Deployment"):
        project = _load_project(ctx)
        manager = LambdaManager(project.function, _connect(ctx, project))
        env = project.environment(environment, description)

        result = manager.deploy(env, cleanup=cleanup)

        action = "created and deployed" if result.created else "deployed"
        click.echo(
            f"✓ Lambda '{result.function_name}' {action} to '{result.environment}' "
            f"(version {result.version})"
        )
        _echo_cleanup(result.cleanup)


@cli.command()
@click.argument("environment")
@click.option(
    "--cleanup/--no-cleanup",
    default=None,
    help="Delete versions no alias points to (default: from the project file)",
)
@click.pass_context
def teardown(ctx, environment, cleanup):
    """
    Remove ENVIRONMENT's alias from the function.

    Example:
        lambdawrap teardown feature-x
    """
    with _handle_errors(ctx, "Teardown"):
        project = _load_project(ctx)
        manager = LambdaManager(project.function, _connect(ctx, project))

        result = manager.teardown(project.environment(environment), cleanup=cleanup)

        if result.alias_removed:
            click.echo(f"✓ Environment '{result.environment}' torn down")
        else:
            click.echo(f"✓ Environment '{result.environment}' had no alias, nothing to remove")
        _echo_cleanup(result.cleanup)


@cli.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx, yes):
    """
    Delete the function with all its versions and aliases.

    Example:
        lambdawrap delete --yes
    """
    with _handle_errors(ctx, "Delete"):
        project = _load_project(ctx)
        name = project.function.lambda_name

        if not yes:
            click.confirm(
                f"Delete Lambda '{name}' with all versions and aliases?", abort=True
            )

        manager = LambdaManager(project.function, _connect(ctx, project))
        if manager.delete():
            click.echo(f"✓ Lambda '{name}' deleted")
        else:
            click.echo(f"Lambda '{name}' does not exist, nothing to delete")


@cli.command()
@click.pass_context
def validate(ctx):
    """
    Validate the project file without contacting AWS.

    Example:
        lambdawrap -c lambdawrap.yaml validate
    """
    config_path = ctx.obj["config_path"]
    click.echo(f"Validating project file: {config_path}")

    with _handle_errors(ctx, "Validation"):
        data = read_project_file(config_path)
        function_options = data.get("function")
        if not isinstance(function_options, dict):
            click.echo("✗ Missing 'function' section", err=True)
            sys.exit(1)

        errors = check_function_options(function_options)
        if errors:
            click.echo(f"✗ Function configuration has {len(errors)} error(s):", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        project = parse_project(data)
        click.echo(f"✓ Lambda '{project.function.lambda_name}' configuration is valid")


@contextmanager
def _handle_errors(ctx, operation: str):
    """Turn lambdawrap errors into a message and exit status 1."""
    try:
        yield
    except LambdaWrapError as e:
        click.echo(f"✗ {operation} failed: {e}", err=True)
        if ctx.obj.get("verbose"):
            import traceback

            traceback.print_exc()
        sys.exit(1)


def _load_project(ctx) -> ProjectConfig:
    return load_project(ctx.obj["config_path"])


def _connect(ctx, project: ProjectConfig) -> FunctionHostingProvider:
    aws_config = project.aws.merged(**ctx.obj["aws_overrides"])
    provider = create_provider(aws_config)
    if ctx.obj.get("verbose"):
        click.echo(f"Using {provider.get_provider_type()} provider in {aws_config.region}")
    return provider


def create_provider(config: AwsConfig) -> FunctionHostingProvider:
    """Build the provider used by every command."""
    return AWSLambdaProvider.from_config(config)


def _echo_cleanup(report: CleanupReport | None) -> None:
    if report is None:
        return
    click.echo(f"  Cleaned up {report.removed} unreferenced version(s)")
    for version, message in report.failed.items():
        click.echo(f"  ✗ Could not delete version {version}: {message}", err=True)


if __name__ == "__main__":
    cli()
