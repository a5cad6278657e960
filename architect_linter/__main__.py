import sys

from architect_linter.cli import main

sys.exit(main())
