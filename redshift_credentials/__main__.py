"""Module entrypoint to run `python -m redshift_credentials`."""

import sys

from redshift_credentials.cli import main

if __name__ == "__main__":
    sys.exit(main())
