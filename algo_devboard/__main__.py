import sys

from algo_devboard.cli import main

sys.exit(main())
