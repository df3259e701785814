"""
Provider connection configuration.
"""

import os

from pydantic import BaseModel, Field


class AwsConfig(BaseModel):
    """
    AWS connection configuration.

    Example:
        aws_config = AwsConfig(
            region="eu-west-1",
            profile="deploy",
        )

        provider = AWSLambdaProvider.from_config(aws_config)
    """

    region: str = Field(default="us-east-1", description="AWS region")
    profile: str | None = Field(default=None, description="AWS profile name")
    endpoint_url: str | None = Field(
        default=None,
        description="Override the Lambda endpoint (e.g. a local emulator)",
    )
    wait_for_updates: bool = Field(
        default=True,
        description="Wait for configuration updates to finish before pushing code",
    )

    class Config:
        extra = "forbid"

    @classmethod
    def from_env(cls, **overrides) -> "AwsConfig":
        """
        Load configuration from the standard AWS environment variables.

        Keyword arguments that are not None take precedence over the
        environment.
        """
        values = {
            "region": os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
            "profile": os.getenv("AWS_PROFILE"),
            "endpoint_url": os.getenv("AWS_ENDPOINT_URL"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**{k: v for k, v in values.items() if v is not None})

    def merged(self, **overrides) -> "AwsConfig":
        """Return a copy with the non-None overrides applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=updates)
