"""
Output Layer
"""

from .assembler import OutputAssembler

__all__ = ["OutputAssembler"]
