import sys

from er_giant.cli import main

sys.exit(main())
