import sys

from coursebrowser.cli import main

sys.exit(main())
