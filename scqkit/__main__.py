import sys

from scqkit.cli import main

sys.exit(main())
