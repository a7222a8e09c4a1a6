"""
Resource metadata package.

Each provider module registers attribute metadata (computed fields, JSON string
fields) and flags for the resource types it knows about.
"""

from ..resource import SchemaRepository
from .aws import init_aws_metadata
from .github import init_github_metadata
from .google import init_google_metadata


def init_resources_metadata(repository: SchemaRepository) -> None:
    """Registers metadata for every supported provider."""
    init_aws_metadata(repository)
    init_google_metadata(repository)
    init_github_metadata(repository)


def build_schema_repository() -> SchemaRepository:
    """Returns a sealed repository holding all provider metadata."""
    repository = SchemaRepository()
    init_resources_metadata(repository)
    repository.seal()
    return repository


def provider_of(resource_type: str) -> str:
    """Extracts the provider name from a Terraform type (aws_s3_bucket -> aws)."""
    return resource_type.split("_", 1)[0]


__all__ = [
    "build_schema_repository",
    "init_resources_metadata",
    "provider_of",
]
