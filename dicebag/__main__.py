import sys

from dicebag.cli import main

sys.exit(main())
