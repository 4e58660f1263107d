# CFM Doctor Lookup — Entry point for running from a source checkout
import sys

from cfm.cli import main

if __name__ == "__main__":
    sys.exit(main())
