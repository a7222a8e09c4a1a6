"""
Unit tests for the resource and schema model.
"""

import unittest

from src.drift_analyser.resource import (
    ABSENT,
    Flags,
    Resource,
    SchemaRepository,
    computed,
    json_string,
)
from src.drift_analyser.resources import build_schema_repository, provider_of
from src.drift_analyser.resources.github import DEEP_MODE_TYPES


class TestAttributes(unittest.TestCase):
    def setUp(self) -> None:
        self.resource = Resource(
            "aws_instance",
            "i-1",
            {
                "ami": "ami-123",
                "tags": {"Name": "web"},
                "labels": {},
                "security_groups": ["sg-1", "sg-2"],
                "ebs_block_device": [{"volume_size": 8}],
                "user_data": None,
            },
        )

    def test_identity(self) -> None:
        self.assertEqual(self.resource.identity(), ("aws_instance", "i-1"))
        self.assertEqual(self.resource.key(), "aws_instance.i-1")
        self.assertEqual(self.resource.to_dict(), {"id": "i-1", "type": "aws_instance"})

    def test_same_resource_across_sets(self) -> None:
        other = Resource("aws_instance", "i-1", {"ami": "ami-456"})
        self.assertEqual(self.resource, other)
        self.assertEqual(len({self.resource, other}), 1)
        self.assertNotEqual(self.resource, Resource("aws_instance", "i-2"))
        self.assertNotEqual(self.resource, Resource("aws_ami", "i-1"))

    def test_path_accessors(self) -> None:
        attributes = self.resource.attributes
        self.assertEqual(attributes.get_string("ami"), "ami-123")
        self.assertEqual(attributes.get_string("tags.Name"), "web")
        self.assertEqual(attributes.get_string(["tags", "Name"]), "web")
        self.assertEqual(attributes.get_slice("security_groups"), ["sg-1", "sg-2"])
        self.assertEqual(attributes.get("security_groups.1"), "sg-2")
        self.assertEqual(attributes.get("ebs_block_device.0.volume_size"), 8)

    def test_missing_paths_are_absent(self) -> None:
        attributes = self.resource.attributes
        self.assertIs(attributes.get("missing"), ABSENT)
        self.assertIs(attributes.get("tags.Owner"), ABSENT)
        self.assertIs(attributes.get("ami.nested"), ABSENT)
        self.assertIs(attributes.get("security_groups.5"), ABSENT)
        self.assertIs(attributes.get("security_groups.first"), ABSENT)
        self.assertIs(attributes.get_map("ami"), ABSENT)
        self.assertIs(attributes.get_string("tags"), ABSENT)
        self.assertFalse(ABSENT)

    def test_empty_and_null_are_not_absent(self) -> None:
        attributes = self.resource.attributes
        self.assertEqual(attributes.get_map("labels"), {})
        self.assertTrue(attributes.has("labels"))
        self.assertIsNone(attributes.get("user_data"))
        self.assertTrue(attributes.has("user_data"))

    def test_to_dict_is_a_copy(self) -> None:
        tree = self.resource.attributes.to_dict()
        tree["tags"]["Name"] = "changed"
        self.assertEqual(self.resource.attributes.get("tags.Name"), "web")


class TestSchemaRepository(unittest.TestCase):
    def test_unknown_type_is_absent(self) -> None:
        repository = SchemaRepository()
        self.assertIsNone(repository.get_schema("aws_unknown"))

    def test_update_schema_is_additive(self) -> None:
        repository = SchemaRepository()
        repository.update_schema("aws_iam_policy", {"policy": json_string})
        repository.update_schema("aws_iam_policy", {"policy": computed, "arn": computed})

        schema = repository.get_schema("aws_iam_policy")
        self.assertIsNotNone(schema)
        self.assertTrue(schema.is_json_string("policy"))
        self.assertTrue(schema.is_computed("policy"))
        self.assertTrue(schema.is_computed("arn"))
        self.assertFalse(schema.is_computed("name"))

    def test_computed_applies_to_descendants_and_list_items(self) -> None:
        repository = SchemaRepository()
        repository.update_schema("aws_instance", {"tags": computed, "ebs.size": computed})
        schema = repository.get_schema("aws_instance")

        self.assertTrue(schema.is_computed(("tags", "Name")))
        self.assertTrue(schema.is_computed(("ebs", "0", "size")))
        self.assertFalse(schema.is_computed(("ebs", "0", "type")))

    def test_flags(self) -> None:
        repository = SchemaRepository()
        repository.set_flags("github_team", Flags.FLAG_DEEP_MODE)
        self.assertTrue(repository.get_schema("github_team").has_flag(Flags.FLAG_DEEP_MODE))

    def test_sealed_repository_rejects_updates(self) -> None:
        repository = SchemaRepository()
        repository.seal()
        with self.assertRaises(RuntimeError):
            repository.update_schema("aws_s3_bucket", {"arn": computed})
        with self.assertRaises(RuntimeError):
            repository.set_flags("aws_s3_bucket", Flags.FLAG_DEEP_MODE)


class TestResourcesMetadata(unittest.TestCase):
    def setUp(self) -> None:
        self.repository = build_schema_repository()

    def test_repository_is_sealed(self) -> None:
        self.assertTrue(self.repository.sealed)

    def test_aws_iam_user_policy_metadata(self) -> None:
        schema = self.repository.get_schema("aws_iam_user_policy")
        self.assertTrue(schema.is_json_string("policy"))
        self.assertTrue(schema.is_computed("id"))
        self.assertFalse(schema.is_computed("user"))

    def test_github_deep_mode_flags(self) -> None:
        for resource_type in DEEP_MODE_TYPES:
            with self.subTest(resource_type=resource_type):
                schema = self.repository.get_schema(resource_type)
                self.assertIsNotNone(schema)
                self.assertTrue(schema.has_flag(Flags.FLAG_DEEP_MODE))

    def test_aws_types_have_no_flags(self) -> None:
        schema = self.repository.get_schema("aws_s3_bucket")
        self.assertEqual(schema.flags, Flags.NONE)

    def test_registered_types(self) -> None:
        resource_types = self.repository.resource_types()
        self.assertEqual(resource_types, sorted(resource_types))
        self.assertIn("aws_iam_user_policy", resource_types)
        self.assertIn("google_compute_instance_group_manager", resource_types)

    def test_provider_of(self) -> None:
        self.assertEqual(provider_of("aws_s3_bucket"), "aws")
        self.assertEqual(provider_of("google_compute_instance_group"), "google")


if __name__ == "__main__":
    unittest.main()
