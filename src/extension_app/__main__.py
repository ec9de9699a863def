# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

import sys

from .cli import main

sys.exit(main())
