import sys

from minutia_screener.cli import main

sys.exit(main())
