import sys

from .cli import main

# python -m string_processor
if __name__ == "__main__":
    sys.exit(main())
