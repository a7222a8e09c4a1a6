"""
Terraform Drift Analyser Package.

Compares the resources declared in a Terraform state with the resources that
actually exist in the cloud and reports:
- unmanaged resources, which exist live but are not declared;
- deleted resources, which are declared but no longer exist;
- drifted resources, whose declared attributes differ from the live ones.

The analysis process:
1. Registers per-type schema metadata (computed and JSON string fields)
2. Reads suppression rules from .driftignore
3. Reads state resources and enumerates live resources
4. Runs the middleware pipeline to reconcile provider-specific shapes
5. Classifies and diffs the resources into one Analysis
"""

from .analysis import Alert, Analysis, ChangeKind, Difference, ResourceDifference, Summary
from .core import DriftEngine, detect_drift
from .filter import DriftIgnore
from .resource import ABSENT, Resource, SchemaRepository

__all__ = [
    "ABSENT",
    "Alert",
    "Analysis",
    "ChangeKind",
    "Difference",
    "DriftEngine",
    "DriftIgnore",
    "Resource",
    "ResourceDifference",
    "SchemaRepository",
    "Summary",
    "detect_drift",
]
