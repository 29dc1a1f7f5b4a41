"""
Kernel layer.

`pairswap.kernels.python` holds the integer pricing and share math. The
`pairswap.core` layer wraps these kernels with domain errors and ledger
bookkeeping.
"""
