import sys

from lr0.cli import main


if __name__ == "__main__":
    sys.exit(main())
