import sys

from pcpreset.cli.main import run_preset

sys.exit(run_preset())
