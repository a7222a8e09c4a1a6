"""
Unit tests for the middleware pipeline.
"""

import unittest
from typing import List

from src.drift_analyser.core import DriftEngine
from src.drift_analyser.errors import MiddlewareError
from src.drift_analyser.middlewares import (
    AttributeScope,
    Chain,
    GoogleComputeInstanceGroupManagerInstances,
    Middleware,
    default_middlewares,
)
from src.drift_analyser.resource import Resource
from src.drift_analyser.resources import build_schema_repository


class _Recorder(Middleware):
    def __init__(self, label: str, calls: List[str]) -> None:
        self.label = label
        self.calls = calls

    def execute(self, remote_resources, state_resources) -> None:
        self.calls.append(self.label)


class _Failing(Middleware):
    def execute(self, remote_resources, state_resources) -> None:
        raise KeyError("boom")


def _manager(name: str) -> Resource:
    return Resource(
        "google_compute_instance_group_manager",
        f"projects/p/zones/z/instanceGroupManagers/{name}",
        {"name": name},
    )


def _group(name: str) -> Resource:
    return Resource(
        "google_compute_instance_group",
        f"projects/p/zones/z/instanceGroups/{name}",
        {"name": name},
    )


class TestGoogleInstanceGroupManagerMiddleware(unittest.TestCase):
    def test_imports_managed_instance_group(self) -> None:
        manager = _manager("web")
        other = Resource("google_compute_instance", "vm-1", {"name": "vm-1"})
        remote = [_group("web"), _group("standalone"), manager, other]
        state = [manager, other]

        GoogleComputeInstanceGroupManagerInstances().execute(remote, state)

        self.assertEqual(state, [manager, _group("web"), other])
        self.assertEqual(len(remote), 4)

    def test_is_idempotent(self) -> None:
        manager = _manager("web")
        remote = [_group("web"), manager]
        state = [manager]

        middleware = GoogleComputeInstanceGroupManagerInstances()
        middleware.execute(remote, state)
        middleware.execute(remote, state)

        self.assertEqual(state, [manager, _group("web")])

    def test_no_members_leaves_state_untouched(self) -> None:
        manager = _manager("web")
        state = [manager]
        GoogleComputeInstanceGroupManagerInstances().execute([manager], state)
        self.assertEqual(state, [manager])

    def test_imported_group_is_managed_not_unmanaged(self) -> None:
        manager = _manager("web")
        remote = [_group("web"), manager]
        engine = DriftEngine(build_schema_repository(), middlewares=default_middlewares())

        analysis = engine.run(remote, [manager])

        self.assertEqual(analysis.unmanaged, ())
        self.assertEqual(analysis.summary.total_managed, 2)


class TestAttributeScope(unittest.TestCase):
    def test_restricts_state_attributes(self) -> None:
        state = [
            Resource(
                "aws_s3_bucket",
                "logs",
                {"bucket": "logs", "acl": "private", "force_destroy": False},
                source="aws_s3_bucket.logs",
            ),
            Resource("aws_iam_user", "bob", {"name": "bob", "force_destroy": True}),
        ]

        AttributeScope({"aws_s3_bucket": ["bucket"]}).execute([], state)

        self.assertEqual(state[0].attributes.to_dict(), {"bucket": "logs"})
        self.assertEqual(state[0].source, "aws_s3_bucket.logs")
        self.assertEqual(
            state[1].attributes.to_dict(), {"name": "bob", "force_destroy": True}
        )

    def test_keeps_id_attribute(self) -> None:
        state = [Resource("aws_s3_bucket", "b1", {"id": "b1", "bucket": "b1", "acl": "private"})]
        remote = [Resource("aws_s3_bucket", "b1", {"id": "b1", "bucket": "b1"})]

        AttributeScope({"aws_s3_bucket": ("bucket",)}).execute(remote, state)

        self.assertEqual(state[0].attributes.to_dict(), {"id": "b1", "bucket": "b1"})

    def test_scoped_resource_in_sync(self) -> None:
        remote = [Resource("aws_s3_bucket", "b1", {"id": "b1", "bucket": "b1"})]
        state = [Resource("aws_s3_bucket", "b1", {"id": "b1", "bucket": "b1", "acl": "private"})]
        engine = DriftEngine(
            build_schema_repository(),
            middlewares=default_middlewares({"aws_s3_bucket": ("bucket",)}),
        )

        analysis = engine.run(remote, state)

        self.assertEqual(analysis.differences, ())
        self.assertTrue(analysis.is_sync())


class TestChain(unittest.TestCase):
    def test_runs_in_registration_order(self) -> None:
        calls: List[str] = []
        chain = Chain([_Recorder("first", calls)]).add(_Recorder("second", calls))

        chain.execute([], [])

        self.assertEqual(calls, ["first", "second"])

    def test_failure_aborts_chain(self) -> None:
        calls: List[str] = []
        chain = Chain([_Failing(), _Recorder("after", calls)])

        with self.assertRaises(MiddlewareError) as ctx:
            chain.execute([], [])

        self.assertEqual(ctx.exception.middleware, "_Failing")
        self.assertIsInstance(ctx.exception.__cause__, KeyError)
        self.assertEqual(calls, [])

    def test_engine_produces_no_analysis_on_middleware_failure(self) -> None:
        engine = DriftEngine(build_schema_repository(), middlewares=[_Failing()])
        with self.assertRaises(MiddlewareError):
            engine.run([Resource("aws_iam_user", "bob")], [])


if __name__ == "__main__":
    unittest.main()
