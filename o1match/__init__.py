"""
O1-Match: talent and job matching for an O-1 visa hiring marketplace.
"""

__app_name__ = "O1-Match"
__version__ = "0.1.0"
