"""
jitc: inject fallback try/catch handling around await expressions in
JSX/TSX component sources.
"""

__version__ = "0.1.0"
