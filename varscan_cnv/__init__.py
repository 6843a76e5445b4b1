# -*- coding: utf-8 -*-

from varscan_cnv._version import __version__

__all__ = ["__version__"]
