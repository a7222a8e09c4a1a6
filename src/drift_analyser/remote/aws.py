"""
AWS Enumerators Module.

Lists live AWS resources with boto3 paginators and maps the API responses onto
Terraform attribute names, so they can be diffed against the state.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import boto3
from botocore.config import Config as BotoConfig

from ...utils import setup_logging
from ..resource import Resource
from ..resources.aws import (
    AWS_IAM_USER_POLICY,
    AWS_LAMBDA_FUNCTION,
    AWS_S3_BUCKET,
)
from ..types import IAMClient, LambdaClient, S3Client
from .scanner import Enumerator

logger = setup_logging()

AWS_IAM_USER = "aws_iam_user"


def _policy_document(document: Any) -> str:
    """IAM returns documents URL-encoded, or already decoded into a dict by boto3."""
    if isinstance(document, str):
        return unquote(document)
    return json.dumps(document)


class LambdaFunctionEnumerator(Enumerator):
    provider = "aws"
    resource_type = AWS_LAMBDA_FUNCTION
    attributes = (
        "function_name",
        "arn",
        "runtime",
        "handler",
        "role",
        "memory_size",
        "timeout",
        "description",
        "last_modified",
        "version",
        "source_code_hash",
        "source_code_size",
    )

    def __init__(self, client: LambdaClient) -> None:
        self.client = client

    def enumerate(self) -> List[Resource]:
        resources = []
        for page in self.client.get_paginator("list_functions").paginate():
            for function in page.get("Functions", []):
                name = function["FunctionName"]
                resources.append(
                    Resource(
                        AWS_LAMBDA_FUNCTION,
                        name,
                        {
                            "id": name,
                            "function_name": name,
                            "arn": function.get("FunctionArn"),
                            "runtime": function.get("Runtime"),
                            "handler": function.get("Handler"),
                            "role": function.get("Role"),
                            "memory_size": function.get("MemorySize"),
                            "timeout": function.get("Timeout"),
                            "description": function.get("Description"),
                            "last_modified": function.get("LastModified"),
                            "version": function.get("Version"),
                            "source_code_hash": function.get("CodeSha256"),
                            "source_code_size": function.get("CodeSize"),
                        },
                    )
                )
        return resources


class IamUserEnumerator(Enumerator):
    provider = "aws"
    resource_type = AWS_IAM_USER
    attributes = ("name", "path", "arn", "unique_id")

    def __init__(self, client: IAMClient) -> None:
        self.client = client

    def enumerate(self) -> List[Resource]:
        resources = []
        for page in self.client.get_paginator("list_users").paginate():
            for user in page.get("Users", []):
                name = user["UserName"]
                resources.append(
                    Resource(
                        AWS_IAM_USER,
                        name,
                        {
                            "id": name,
                            "name": name,
                            "path": user.get("Path"),
                            "arn": user.get("Arn"),
                            "unique_id": user.get("UserId"),
                        },
                    )
                )
        return resources


class IamUserPolicyEnumerator(Enumerator):
    """Inline user policies; Terraform ids them as "user:policy_name"."""

    provider = "aws"
    resource_type = AWS_IAM_USER_POLICY
    attributes = ("name", "user", "policy")

    def __init__(self, client: IAMClient) -> None:
        self.client = client

    def _user_names(self) -> List[str]:
        names = []
        for page in self.client.get_paginator("list_users").paginate():
            names.extend(user["UserName"] for user in page.get("Users", []))
        return names

    def enumerate(self) -> List[Resource]:
        resources = []
        paginator = self.client.get_paginator("list_user_policies")
        for user_name in self._user_names():
            for page in paginator.paginate(UserName=user_name):
                for policy_name in page.get("PolicyNames", []):
                    response = self.client.get_user_policy(
                        UserName=user_name, PolicyName=policy_name
                    )
                    resource_id = f"{user_name}:{policy_name}"
                    resources.append(
                        Resource(
                            AWS_IAM_USER_POLICY,
                            resource_id,
                            {
                                "id": resource_id,
                                "name": policy_name,
                                "user": user_name,
                                "policy": _policy_document(response["PolicyDocument"]),
                            },
                        )
                    )
        return resources


class S3BucketEnumerator(Enumerator):
    provider = "aws"
    resource_type = AWS_S3_BUCKET
    attributes = ("bucket",)

    def __init__(self, client: S3Client) -> None:
        self.client = client

    def enumerate(self) -> List[Resource]:
        response = self.client.list_buckets()
        return [
            Resource(AWS_S3_BUCKET, bucket["Name"], {"id": bucket["Name"], "bucket": bucket["Name"]})
            for bucket in response.get("Buckets", [])
        ]


def aws_enumerators(
    region_name: Optional[str] = None,
    max_retries: int = 3,
    timeout_seconds: int = 30,
    session: Optional[boto3.session.Session] = None,
) -> List[Enumerator]:
    """Builds the AWS enumerators, sharing one boto3 session."""
    if session is None:
        session = boto3.session.Session(region_name=region_name)
    client_config = BotoConfig(
        retries={"max_attempts": max_retries, "mode": "standard"},
        connect_timeout=timeout_seconds,
        read_timeout=timeout_seconds,
    )
    clients: Dict[str, Any] = {
        service: session.client(service, config=client_config)
        for service in ("lambda", "iam", "s3")
    }
    logger.debug(f"Initialised AWS clients for region {session.region_name}")
    return [
        LambdaFunctionEnumerator(clients["lambda"]),
        IamUserEnumerator(clients["iam"]),
        IamUserPolicyEnumerator(clients["iam"]),
        S3BucketEnumerator(clients["s3"]),
    ]
