import sys

from lfscheck.cli import main

sys.exit(main())
