"""
Type definitions for the drift analyser.

Attribute trees are plain JSON-like structures, so these aliases document intent
rather than enforce structure.
"""

# boto3 does not provide static type stubs for service clients, and the methods
# available on each client are dynamically generated at runtime.
from typing import Any, Dict, List, Sequence, Union

LambdaClient = Any
IAMClient = Any
S3Client = Any

# Resource data types
AttributeValue = Union[str, int, float, bool, List, Dict, None]
AttributeTree = Dict[str, AttributeValue]

# An attribute path is either dotted ("tags.Name") or a sequence of segments
AttributePath = Union[str, Sequence[str]]

# Terraform state types
TerraformState = Dict[str, Any]

# Serialized analysis
AnalysisDict = Dict[str, Any]
