#main.py

"""
superfs - directory tree operations from the command line
"""
import sys

from superfs.cli import main

if __name__ == "__main__":
    sys.exit(main())
