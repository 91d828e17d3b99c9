"""Dense matrices over GF(2): bit access, arithmetic, blocks and elimination."""

__version__ = "0.1.0"
__all__ = ["arith", "blocks", "echelon", "matrix"]