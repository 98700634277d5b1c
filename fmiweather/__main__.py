import sys

from fmiweather.cli import main

sys.exit(main())
