"""
Flies a vessel from the launch pad to a circular orbit and back down again
over kRPC.
"""
__version__ = '0.1.0'
