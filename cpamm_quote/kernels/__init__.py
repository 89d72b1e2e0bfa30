"""
Kernel layer.

`cpamm_quote.kernels.python` holds the integer-only arithmetic shared by every
quote: fixed-point mul-div with explicit rounding and the sqrt-price curve.
Higher layers (`cpamm_quote.core`) add validation, fee policy and snapshots.
"""
