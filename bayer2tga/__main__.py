import sys

from bayer2tga.cli import main

sys.exit(main())
