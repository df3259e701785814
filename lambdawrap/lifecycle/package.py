"""
Deployment package loading.
"""

from pathlib import Path

from lambdawrap.errors import MissingArtifactError


def load_deployment_package(path: str | Path) -> bytes:
    """
    Read the deployment package zip file.

    Raises:
        MissingArtifactError: If the path does not point to a file
    """
    path = Path(path)
    if not path.is_file():
        raise MissingArtifactError(path)
    return path.read_bytes()
