import sys

from whatsup.cli import main

sys.exit(main())
