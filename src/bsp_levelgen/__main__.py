import sys

from bsp_levelgen.cli import main

sys.exit(main())
