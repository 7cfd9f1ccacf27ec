#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lay out repeated print rows on a fabric roll PDF.
"""

import sys

import estamparia_layout.cli


if __name__ == "__main__":
	sys.exit(estamparia_layout.cli.main())
