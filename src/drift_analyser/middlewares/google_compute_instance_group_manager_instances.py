"""
Google Compute Instance Group Manager Middleware.

Creating a google_compute_instance_group_manager through Terraform makes
Google create an instance group of the same name that is not part of the
state. This middleware adds those remote instance groups to the state.
"""

from ..resources.google import (
    GOOGLE_COMPUTE_INSTANCE_GROUP,
    GOOGLE_COMPUTE_INSTANCE_GROUP_MANAGER,
)
from .base import ManagedMembersImporter


class GoogleComputeInstanceGroupManagerInstances(ManagedMembersImporter):
    manager_type = GOOGLE_COMPUTE_INSTANCE_GROUP_MANAGER
    member_type = GOOGLE_COMPUTE_INSTANCE_GROUP
    manager_key = "name"
    member_key = "name"
