import sys

from miro_export.cli import main

sys.exit(main())
