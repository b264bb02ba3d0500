import sys

from readme_wizard.cli import main

sys.exit(main())
