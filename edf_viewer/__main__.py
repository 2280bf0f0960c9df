import sys

from edf_viewer.main import main

sys.exit(main())
