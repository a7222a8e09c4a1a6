"""Google Cloud resource metadata."""

from ..resource import SchemaRepository, computed

GOOGLE_COMPUTE_INSTANCE_GROUP = "google_compute_instance_group"
GOOGLE_COMPUTE_INSTANCE_GROUP_MANAGER = "google_compute_instance_group_manager"


def init_google_metadata(repository: SchemaRepository) -> None:
    repository.update_schema(
        GOOGLE_COMPUTE_INSTANCE_GROUP,
        {
            "self_link": computed,
            "size": computed,
        },
    )
    repository.update_schema(
        GOOGLE_COMPUTE_INSTANCE_GROUP_MANAGER,
        {
            "fingerprint": computed,
            "instance_group": computed,
            "self_link": computed,
            "status": computed,
        },
    )
