"""
GitHub resource metadata.

These types are only partially returned by list calls; the deep mode flag tells
enumeration to fetch each one individually. Diffing ignores the flag.
"""

from ..resource import Flags, SchemaRepository, computed

GITHUB_BRANCH_PROTECTION = "github_branch_protection"
GITHUB_MEMBERSHIP = "github_membership"
GITHUB_TEAM_MEMBERSHIP = "github_team_membership"
GITHUB_REPOSITORY = "github_repository"
GITHUB_TEAM = "github_team"

DEEP_MODE_TYPES = (
    GITHUB_BRANCH_PROTECTION,
    GITHUB_MEMBERSHIP,
    GITHUB_TEAM_MEMBERSHIP,
    GITHUB_REPOSITORY,
    GITHUB_TEAM,
)


def init_github_metadata(repository: SchemaRepository) -> None:
    for resource_type in DEEP_MODE_TYPES:
        repository.set_flags(resource_type, Flags.FLAG_DEEP_MODE)
    repository.update_schema(
        GITHUB_REPOSITORY,
        {
            "etag": computed,
            "full_name": computed,
            "node_id": computed,
            "repo_id": computed,
        },
    )
    repository.update_schema(GITHUB_TEAM, {"etag": computed, "slug": computed})
    repository.update_schema(GITHUB_MEMBERSHIP, {"etag": computed})
    repository.update_schema(GITHUB_TEAM_MEMBERSHIP, {"etag": computed})
