"""
QR Mapper
Links printed event badges to attendee ticket URLs.
"""

__version__ = "0.1.0"
