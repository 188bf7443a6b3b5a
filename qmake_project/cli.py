import argparse
import json
import logging
import sys

from qmake_project.errors import QMakeProjectError
from qmake_project.project import Project


def add_arguments(arg_parser):
    arg_parser.add_argument(
        "path", help="qmake-generated Makefile, .pro file, or directory containing one"
    )
    arg_parser.add_argument(
        "-v",
        "--values",
        metavar="NAME",
        action="append",
        default=[],
        help="qmake variable to print (repeatable)",
    )
    arg_parser.add_argument(
        "-t",
        "--test",
        metavar="EXPR",
        action="append",
        default=[],
        help="qmake test (scope) to evaluate (repeatable)",
    )
    arg_parser.add_argument("--make", help="make binary used to query a Makefile")
    arg_parser.add_argument("--qmake", help="qmake binary to use")
    arg_parser.add_argument(
        "--no-die-on-error",
        dest="die_on_error",
        action="store_false",
        help="print a warning and empty values instead of failing",
    )
    arg_parser.add_argument("--verbose", action="store_true", help="debug logging")


def main(argv=None):
    arg_parser = argparse.ArgumentParser(
        prog="qmake_project", description="Evaluate qmake variables and tests using qmake itself."
    )
    add_arguments(arg_parser)
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    project = Project(args.path)
    if args.make:
        project.set_make(args.make)
    if args.qmake:
        project.set_qmake(args.qmake)
    project.set_die_on_error(args.die_on_error)

    values = {name: project.values(name) for name in args.values}
    tests = {expr: project.test(expr) for expr in args.test}
    try:
        result = {
            "variables": {name: value.as_list() for name, value in values.items()},
            "tests": {expr: value.as_bool() for expr, value in tests.items()},
        }
    except QMakeProjectError as e:
        print(str(e), file=sys.stderr)
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


__all__ = ["add_arguments", "main"]
