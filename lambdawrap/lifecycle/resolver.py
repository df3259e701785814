"""
Resource resolution: what does the provider currently hold for a function?
"""

import logging

from lambdawrap.errors import ResourceNotFoundError
from lambdawrap.providers.base import FunctionDetails, FunctionHostingProvider

logger = logging.getLogger(__name__)


def resolve_function(
    provider: FunctionHostingProvider, name: str
) -> FunctionDetails | None:
    """
    Look up a function's current configuration.

    Returns:
        The function details, or None when the function does not exist.

    Raises:
        ProviderError: For any failure other than "not found"
    """
    try:
        return provider.get_function(name)
    except ResourceNotFoundError:
        logger.info("Lambda %s does not exist.", name)
        return None
