import io
import json
import os
import sys
import unittest
from unittest import mock

__module_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, __module_dir)
import base
from qmake_project import cli


class TestCli(base.TestBase):
    def setUp(self):
        self.root = self.make_temp_dir()
        self.pro = self.write_file(os.path.join(self.root, "myapp.pro"), "TARGET = myapp\n")
        self.fake = base.FakeQmake(variables={"TARGET": ["myapp"], "QT": ["core", "gui"]}, tests={"unix": True})

    def run_cli(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with mock.patch("qmake_project.process.run_command", side_effect=self.fake), \
                mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr), \
                mock.patch("logging.basicConfig"):
            status = cli.main(argv)
        return status, stdout.getvalue(), stderr.getvalue()

    def test_values_and_tests(self):
        status, out, _ = self.run_cli(
            [self.pro, "--qmake", "/opt/qt/bin/qmake", "-v", "TARGET", "-v", "QT", "-t", "unix", "-t", "win32"]
        )
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out), {
            "variables": {"TARGET": ["myapp"], "QT": ["core", "gui"]},
            "tests": {"unix": True, "win32": False},
        })
        self.assertEqual(len(self.fake.calls), 1)

    def test_error(self):
        status, out, err = self.run_cli([os.path.join(self.root, "missing.pro"), "--qmake", "qmake", "-v", "TARGET"])
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertIn("is not an existing directory or file", err)

    def test_no_die_on_error(self):
        status, out, _ = self.run_cli(
            [os.path.join(self.root, "missing.pro"), "--qmake", "qmake", "--no-die-on-error", "-v", "TARGET"]
        )
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out), {"variables": {"TARGET": []}, "tests": {}})


if __name__ == "__main__":
    unittest.main()
