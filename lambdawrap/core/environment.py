"""
Environment: a named deployment target (staging, production, ...).

Each environment maps to one alias on the managed function. The alias has
the same name as the environment and points at the version most recently
deployed to it.
"""

from dataclasses import dataclass

from lambdawrap.errors import ConfigurationError


@dataclass(frozen=True)
class Environment:
    """
    A deployment target.

    Example:
        staging = Environment(name="staging", description="Pre-production")
        manager.deploy(staging)
    """

    name: str
    """Environment name; also the name of the alias"""

    description: str | None = None
    """Alias description; a generic one is used when omitted"""

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("Environment name must be provided", field="name")

    def __repr__(self):
        return f"Environment(name={self.name})"
