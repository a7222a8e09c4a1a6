"""
Terraform State Reader Module.

Reads a Terraform state file (format version 4) from a local:// path or from S3
and turns every managed resource instance into a Resource. Data sources are
not infrastructure and are skipped.
"""

from typing import List, Optional

from ..utils import download_s3_file, parse_terraform_state, setup_logging
from .errors import StateReadError
from .resource import Resource
from .types import TerraformState

logger = setup_logging()

LOCAL_PREFIX = "local://"
S3_PREFIX = "s3://"


def read_state_content(path: str, region_name: Optional[str] = None) -> str:
    """
    Returns the raw content of a state file.

    Args:
        path: 's3://bucket/key' or 'local://path'
        region_name: AWS region used for S3 downloads

    Raises:
        StateReadError: If the path has no supported prefix or the file cannot
            be read
    """
    if not path.startswith((S3_PREFIX, LOCAL_PREFIX)):
        raise StateReadError(
            f"Unsupported state path {path!r}, expected s3:// or local://"
        )
    try:
        if path.startswith(S3_PREFIX):
            return download_s3_file(path, logger, region_name=region_name)
        local_path = path[len(LOCAL_PREFIX):]
        with open(local_path, "r", encoding="utf-8") as f:
            return f.read()
    except Exception as e:
        raise StateReadError(f"Unable to read state {path}: {e}") from e


def _address(resource: dict, index_key: object) -> str:
    parts = []
    if resource.get("module"):
        parts.append(resource["module"])
    parts.append(f"{resource.get('type')}.{resource.get('name')}")
    address = ".".join(parts)
    if index_key is not None:
        address += f"[{index_key!r}]" if isinstance(index_key, str) else f"[{index_key}]"
    return address


def resources_from_state(state_data: TerraformState) -> List[Resource]:
    """Extracts managed resource instances from parsed state data."""
    resources: List[Resource] = []
    for resource in state_data.get("resources", []):
        if resource.get("mode", "managed") != "managed":
            logger.debug(
                f"Skipping data source {resource.get('type')}.{resource.get('name')}"
            )
            continue
        resource_type = resource.get("type")
        if not resource_type:
            logger.warning(f"Skipping state resource without type: {resource.get('name')}")
            continue

        for instance in resource.get("instances", []):
            attributes = instance.get("attributes") or {}
            address = _address(resource, instance.get("index_key"))
            resource_id = attributes.get("id")
            if not resource_id:
                logger.warning(f"Skipping {address}: no id in state attributes")
                continue
            resources.append(
                Resource(resource_type, str(resource_id), attributes, source=address)
            )

    logger.info(f"Read {len(resources)} resources from state")
    return resources


def read_state(path: str, region_name: Optional[str] = None) -> List[Resource]:
    """
    Reads and parses a Terraform state file into resources.

    Raises:
        StateReadError: If the file cannot be read or is not valid state JSON
    """
    content = read_state_content(path, region_name=region_name)
    try:
        state_data = parse_terraform_state(content, logger)
    except ValueError as e:
        raise StateReadError(str(e)) from e
    return resources_from_state(state_data)
