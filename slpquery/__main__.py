"""
Main entry point for slpquery.
"""
import sys

from slpquery.app import main

if __name__ == "__main__":
    sys.exit(main())
