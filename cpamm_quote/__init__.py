"""
cpamm_quote: deterministic pricing and fee engine for concentrated constant-product pools.
"""

__version__ = "0.1.0"
