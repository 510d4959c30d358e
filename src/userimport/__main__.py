import sys

from userimport.cli import main

sys.exit(main())
