import sys

from contact_sheet.cli import main

sys.exit(main())
