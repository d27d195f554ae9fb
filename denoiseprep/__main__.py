# -*- coding: utf-8 -*-
"""
Allow ``python -m denoiseprep``.

Author
------
geoint.org contributors

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.
"""

import sys

from denoiseprep.cli import main

sys.exit(main())
