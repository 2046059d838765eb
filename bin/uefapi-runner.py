#!/usr/bin/env python3
"""
This script serves as the executable entry point for the uefapi-runner application.

Its sole purpose is to configure the Python path to include the project's root
directory, allowing the `uefapi_runner` package to be imported, and then to
execute the main function from the `uefapi_runner.main` module.
"""

import sys
from pathlib import Path

# The script is in `bin/`, so the project root is two levels up.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from uefapi_runner.main import main

if __name__ == "__main__":
    main()
