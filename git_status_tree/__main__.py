import sys

from git_status_tree.cli.main import main

sys.exit(main())
