import sys

from livefeed.cli import main

sys.exit(main())
