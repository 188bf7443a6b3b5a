import glob
import os
import shlex
import sys
import unittest
from unittest import mock

__module_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, __module_dir)
import base
from base import MAGIC_EXIT_STRING, SAFE_NAMESPACE
from qmake_project import invoker
from qmake_project.discovery import ResolvedFiles
from qmake_project.errors import InvocationError
from qmake_project.kind import Kind, Request


class TestInvoker(base.TestBase):
    def setUp(self):
        self.root = self.make_temp_dir()
        self.src = os.path.join(self.root, "src")
        self.build = os.path.join(self.root, "build")
        os.mkdir(self.build)
        self.pro = self.write_file(os.path.join(self.src, "my.app.pro"), "TARGET = myapp\n")
        self.resolved = ResolvedFiles(
            "/opt/qt/bin/qmake", ["-spec", "linux-g++", "CONFIG+=x"], self.pro, os.path.join(self.build, "Makefile")
        )

    def leftovers(self):
        return glob.glob(os.path.join(self.root, "*", SAFE_NAMESPACE + "*"))

    def test_initial_target(self):
        self.assertEqual(invoker.initial_target("/a/b/app.pro"), "app")
        self.assertEqual(invoker.initial_target("/a/b/my.app.pro"), "my")
        self.assertEqual(invoker.initial_target("/a/b/my app.pro"), '"my app"')

    def test_features_env(self):
        env = invoker.features_env("/tmp/f", {"QMAKEFEATURES": "/other"})
        self.assertEqual(env["QMAKEFEATURES"], "/tmp/f" + os.pathsep + "/other")
        self.assertEqual(invoker.features_env("/tmp/f", {})["QMAKEFEATURES"], "/tmp/f")

    def test_run_qmake(self):
        fake = base.FakeQmake(variables={"TARGET": ["myapp"]})
        with mock.patch("qmake_project.process.run_command", side_effect=fake):
            output = invoker.run_qmake(self.resolved, [Request(Kind.VARIABLE, "TARGET")])

        self.assertIn("variable:TARGET:myapp", output)
        call = fake.calls[0]
        words = call["words"]
        self.assertEqual(words[0], "/opt/qt/bin/qmake")
        self.assertEqual(words[1], "-o")
        self.assertEqual(os.path.dirname(words[2]), self.build)
        self.assertEqual(words[3], "TARGET=my")
        self.assertEqual(os.path.dirname(words[4]), self.src)
        self.assertTrue(words[4].endswith(".pro"))
        self.assertEqual(words[5:], ["-spec", "linux-g++", "CONFIG+=x"])
        self.assertEqual(call["cwd"], self.build)
        self.assertTrue(fake.pro.startswith("TARGET = myapp\n"))
        self.assertEqual(self.leftovers(), [])
        self.assertFalse(os.path.exists(call["env"]["QMAKEFEATURES"].split(os.pathsep)[0]))

    def test_cleans_up_extra_makefiles(self):
        def fake(command, cwd=None, env=None):
            temp_build = shlex.split(command)[2]
            for suffix in (".Debug", ".Release"):
                self.write_file(temp_build + suffix, "all:\n")
            return "Project ERROR: %s\n" % MAGIC_EXIT_STRING, 3

        with mock.patch("qmake_project.process.run_command", side_effect=fake):
            invoker.run_qmake(self.resolved, [])
        self.assertEqual(self.leftovers(), [])
        self.assertEqual(sorted(os.listdir(self.build)), [])

    def test_failure(self):
        with mock.patch("qmake_project.process.run_command", return_value=("Project ERROR: oops\n", 3)):
            with self.assertRaises(InvocationError) as ctx:
                invoker.run_qmake(self.resolved, [Request(Kind.TEST, "unix")])
        self.assertEqual(ctx.exception.status, 3)
        self.assertEqual(ctx.exception.cwd, self.build)
        self.assertIn("Project ERROR: oops", str(ctx.exception))
        self.assertIn("/opt/qt/bin/qmake", ctx.exception.command)
        self.assertEqual(self.leftovers(), [])

    def test_unexpected_exception_cleans_up(self):
        with mock.patch("qmake_project.process.run_command", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                invoker.run_qmake(self.resolved, [])
        self.assertEqual(self.leftovers(), [])

    def test_unwritable_directory(self):
        resolved = self.resolved._replace(build_file=os.path.join(self.root, "missing", "Makefile"))
        with self.assertRaises(InvocationError):
            invoker.run_qmake(resolved, [])
        self.assertEqual(self.leftovers(), [])


if __name__ == "__main__":
    unittest.main()
