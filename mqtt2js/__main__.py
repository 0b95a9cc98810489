import sys

from mqtt2js.cli import main

sys.exit(main())
