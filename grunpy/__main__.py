import sys
from grunpy.main import main

if __name__ == "__main__":
    sys.exit(main())
