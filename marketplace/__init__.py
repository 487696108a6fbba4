"""
Balloon marketplace messaging service
"""
__version__ = "1.0.0"
