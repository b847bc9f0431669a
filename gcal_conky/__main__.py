import sys

from gcal_conky.main import main

sys.exit(main())
