"""
AWS resource metadata.

Policy documents are stored by Terraform as JSON strings while AWS may return
them re-serialised with different whitespace or key order, so they are marked
as json_string and compared structurally. Fields AWS fills in on its own are
marked computed.
"""

from ..resource import SchemaRepository, computed, json_string

AWS_IAM_USER_POLICY = "aws_iam_user_policy"
AWS_IAM_POLICY = "aws_iam_policy"
AWS_IAM_ROLE = "aws_iam_role"
AWS_IAM_ROLE_POLICY = "aws_iam_role_policy"
AWS_S3_BUCKET = "aws_s3_bucket"
AWS_S3_BUCKET_POLICY = "aws_s3_bucket_policy"
AWS_SQS_QUEUE_POLICY = "aws_sqs_queue_policy"
AWS_LAMBDA_FUNCTION = "aws_lambda_function"
AWS_INSTANCE = "aws_instance"


def init_aws_metadata(repository: SchemaRepository) -> None:
    repository.update_schema(
        AWS_IAM_USER_POLICY,
        {
            "id": computed,
            "name": computed,
            "policy": json_string,
        },
    )
    repository.update_schema(
        AWS_IAM_POLICY,
        {
            "arn": computed,
            "policy_id": computed,
            "policy": json_string,
        },
    )
    repository.update_schema(
        AWS_IAM_ROLE,
        {
            "arn": computed,
            "create_date": computed,
            "unique_id": computed,
            "assume_role_policy": json_string,
        },
    )
    repository.update_schema(
        AWS_IAM_ROLE_POLICY,
        {
            "name": computed,
            "policy": json_string,
        },
    )
    repository.update_schema(
        AWS_S3_BUCKET,
        {
            "arn": computed,
            "bucket_domain_name": computed,
            "bucket_regional_domain_name": computed,
            "hosted_zone_id": computed,
            "region": computed,
            "policy": json_string,
        },
    )
    repository.update_schema(AWS_S3_BUCKET_POLICY, {"policy": json_string})
    repository.update_schema(AWS_SQS_QUEUE_POLICY, {"policy": json_string})
    repository.update_schema(
        AWS_LAMBDA_FUNCTION,
        {
            "arn": computed,
            "invoke_arn": computed,
            "last_modified": computed,
            "qualified_arn": computed,
            "source_code_hash": computed,
            "source_code_size": computed,
            "version": computed,
        },
    )
    repository.update_schema(
        AWS_INSTANCE,
        {
            "arn": computed,
            "private_dns": computed,
            "private_ip": computed,
            "public_dns": computed,
            "public_ip": computed,
            "instance_state": computed,
            "primary_network_interface_id": computed,
        },
    )
