# -*- coding: utf-8 -*-
"""
Service status script
Reports whether the cart offer app and the mock segment server are running
"""

import os
import sys

# Project root
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from cartoffer.tools.service_check import main

if __name__ == "__main__":
    sys.exit(main())
