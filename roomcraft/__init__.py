"""
Roomcraft: room analysis and product recommendation API
"""
__version__ = "1.0.0"
