#!/usr/bin/env python

"""
    WallFit
    =======

    WallFit fits Markdown documents on wallpapers.

"""

import sys

from setuptools import setup

if sys.version_info.major < 3:
    raise RuntimeError('WallFit does not support Python 2.x.')

setup()
