"""
Image Steganography Service - marker-framed LSB text hiding

- Text hidden in the least significant bit of the R, G and B channels
- <<START>>/<<END>> markers delimit the payload, no length header
- Capacity checks before any pixel is touched
- Bounded marker scan on extraction
"""

__version__ = "1.0.0"
__author__ = "Stealth Lab Team"
