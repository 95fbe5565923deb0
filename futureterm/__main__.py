import sys

from futureterm.tui.dashboard import main

sys.exit(main())
