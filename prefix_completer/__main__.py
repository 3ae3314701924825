import sys

from prefix_completer.cli.cli import main

sys.exit(main())
