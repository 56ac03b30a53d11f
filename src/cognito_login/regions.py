"""Region validation backed by botocore's bundled endpoint data.

The endpoint data is read straight from botocore's data loader, so no AWS
profile or credentials are resolved.
"""

from __future__ import annotations

from functools import lru_cache

from botocore.exceptions import BotoCoreError
from botocore.loaders import create_loader
from botocore.regions import EndpointResolver

from cognito_login.exceptions import InvalidRegionError

SERVICE_NAME = "cognito-idp"


@lru_cache(maxsize=1)
def known_regions() -> frozenset[str]:
    """All regions, across partitions, where the Cognito user pool API exists."""
    resolver = EndpointResolver(create_loader().load_data("endpoints"))
    regions: set[str] = set()
    for partition in resolver.get_available_partitions():
        regions.update(
            resolver.get_available_endpoints(SERVICE_NAME, partition_name=partition)
        )
    return frozenset(regions)


def parse_region(value: str, project: str | None = None) -> str:
    """Normalize a region identifier and check that it is known.

    Args:
        value: Raw region value, e.g. "eu-west-1" or " US-EAST-1 ".
        project: Project name, used only in the error message.

    Returns:
        The normalized (lower-case, stripped) region name.

    Raises:
        InvalidRegionError: If the region is not recognized, or the endpoint
            data cannot be loaded.
    """
    region = value.strip().lower()
    try:
        regions = known_regions()
    except BotoCoreError as e:
        raise InvalidRegionError(value, project) from e
    if region not in regions:
        raise InvalidRegionError(value, project)
    return region
