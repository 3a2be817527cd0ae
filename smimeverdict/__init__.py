# *-* coding: utf-8 *-*
__author__ = 'smimeverdict developers'
__version__ = '1.0.0'
