import sys

from pageres.cli import main

sys.exit(main())
