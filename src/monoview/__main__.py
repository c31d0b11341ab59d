import sys

from monoview.main import main


sys.exit(main())
