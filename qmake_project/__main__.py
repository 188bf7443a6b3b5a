import sys

from qmake_project.cli import main

sys.exit(main())
