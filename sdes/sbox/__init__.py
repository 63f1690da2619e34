"""
S-box Package

This package holds the fixed substitution tables used by the confuse
step and helpers for evaluating their properties.
"""

from .tables import S1, S2, evaluate_sbox

__all__ = ['S1', 'S2', 'evaluate_sbox']
