"""
Status Probe Module Entry Point

Allows execution via: python -m apps.status_probe
"""

import sys

from apps.status_probe.probe import main

if __name__ == "__main__":
    sys.exit(main())
