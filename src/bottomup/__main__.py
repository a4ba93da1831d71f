import sys

from bottomup.commands import main

if __name__ == "__main__":
    sys.exit(main())
