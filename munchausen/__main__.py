# munchausen/__main__.py
import sys

from .core.application_launcher import main

if __name__ == "__main__":
    sys.exit(main())
