from qmake_project.parsers.qmake_command import ParsedCommand, QmakeCommandParser, split_command
from qmake_project.parsers.qmake_output import QmakeOutputParser

__all__ = ["ParsedCommand", "QmakeCommandParser", "QmakeOutputParser", "split_command"]
