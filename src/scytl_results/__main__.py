import sys

from scytl_results.cli import main

sys.exit(main())
