"""
Unit tests for report outputs and printers.
"""

import io
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from src.drift_analyser.analyser import Analyzer
from src.drift_analyser.analysis import Alert
from src.drift_analyser.output import (
    ConsoleOutput,
    ConsolePrinter,
    JSONOutput,
    VoidPrinter,
    get_output,
)
from src.drift_analyser.resource import Resource
from src.drift_analyser.resources import build_schema_repository


def _analysis(alerts=None):
    remote = [
        Resource("aws_s3_bucket", "extra", {"bucket": "extra"}),
        Resource("aws_lambda_function", "api", {"function_name": "api", "timeout": 30}),
    ]
    state = [
        Resource("aws_lambda_function", "api", {"function_name": "api", "timeout": 10}),
        Resource("aws_iam_user", "gone", {"name": "gone"}),
    ]
    return Analyzer(build_schema_repository()).analyze(remote, state, alerts)


class TestGetOutput(unittest.TestCase):
    def test_console(self) -> None:
        self.assertIsInstance(get_output("console://"), ConsoleOutput)

    def test_json(self) -> None:
        output = get_output("json://result.json")
        self.assertIsInstance(output, JSONOutput)
        self.assertEqual(output.path, "result.json")

    def test_invalid(self) -> None:
        for url in ("console", "json://", "yaml://out.yaml"):
            with self.subTest(url=url):
                with self.assertRaises(ValueError):
                    get_output(url)


class TestJSONOutput(unittest.TestCase):
    def test_write_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "result.json")
            JSONOutput(path).write(_analysis())
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)

        self.assertEqual(
            list(document),
            ["summary", "managed", "unmanaged", "deleted", "differences", "coverage", "alerts"],
        )
        self.assertEqual(document["summary"]["total_resources"], 3)
        self.assertEqual(document["summary"]["total_changed"], 1)
        self.assertEqual(document["unmanaged"], [{"id": "extra", "type": "aws_s3_bucket"}])
        self.assertEqual(document["deleted"], [{"id": "gone", "type": "aws_iam_user"}])
        self.assertEqual(document["coverage"], 33)
        self.assertEqual(
            document["differences"][0]["changelog"][0],
            {"type": "update", "path": ["timeout"], "from": 10, "to": 30, "computed": False},
        )

    def test_write_stdout_is_single_document(self) -> None:
        for path in ("stdout", "/dev/stdout"):
            with self.subTest(path=path):
                output = JSONOutput(path)
                self.assertTrue(output.is_stdout())
                self.assertEqual(output.get_info_printer(), VoidPrinter())

                buffer = io.StringIO()
                with patch("sys.stdout", buffer):
                    output.get_info_printer().printf("Scanning resources: %s\r", "x")
                    output.write(_analysis())
                json.loads(buffer.getvalue())

    def test_file_output_keeps_info_messages(self) -> None:
        self.assertEqual(JSONOutput("out.json").get_info_printer(), ConsolePrinter())

    def test_alerts_are_serialised(self) -> None:
        alerts = {"aws/aws_iam_user_policy": [Alert("Listing is forbidden.")]}
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "result.json")
            JSONOutput(path).write(_analysis(alerts))
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)

        self.assertEqual(
            document["alerts"],
            {"aws/aws_iam_user_policy": [{"message": "Listing is forbidden."}]},
        )


class TestConsoleOutput(unittest.TestCase):
    def test_report_contents(self) -> None:
        stream = io.StringIO()
        alerts = {"aws/aws_iam_user_policy": [Alert("Listing is forbidden.")]}

        ConsoleOutput(stream).write(_analysis(alerts))

        report = stream.getvalue()
        self.assertIn("Deleted Resources (1)", report)
        self.assertIn("aws_iam_user gone", report)
        self.assertIn("Unmanaged Resources (1)", report)
        self.assertIn("aws_s3_bucket extra", report)
        self.assertIn("~ timeout: 10 => 30", report)
        self.assertIn("33% coverage", report)
        self.assertIn("aws/aws_iam_user_policy: Listing is forbidden.", report)
        self.assertNotIn("Congrats!", report)

    def test_in_sync_report(self) -> None:
        stream = io.StringIO()
        analysis = Analyzer(build_schema_repository()).analyze([], [])

        ConsoleOutput(stream).write(analysis)

        self.assertIn("Congrats! Your infrastructure is fully in sync.", stream.getvalue())


class TestPrinters(unittest.TestCase):
    def test_console_printer_formats(self) -> None:
        stream = io.StringIO()
        ConsolePrinter(stream).printf("%s resources\n", 3)
        ConsolePrinter(stream).printf("100% done")
        self.assertEqual(stream.getvalue(), "3 resources\n100% done")


if __name__ == "__main__":
    unittest.main()
