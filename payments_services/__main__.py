import sys

from payments_services.cli import main

sys.exit(main())
