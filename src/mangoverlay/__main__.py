import sys

from mangoverlay.cli import main


if __name__ == "__main__":
    sys.exit(main())
