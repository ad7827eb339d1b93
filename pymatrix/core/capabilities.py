"""
Capability string constants for pymatrix.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pymatrix.core.capabilities import CAPABILITY_WRITE

    if target.supports(CAPABILITY_WRITE):
        target[0, 0] = 1.0
"""

# Elements can be read with m[i, j]
CAPABILITY_READ = 'read'

# Elements can be written with m[i, j] = value
CAPABILITY_WRITE = 'write'

# Object owns its element buffer (as opposed to borrowing one)
CAPABILITY_OWNING = 'owning'

# Object applies transpose/conjugate lazily on access
CAPABILITY_LAZY_TRANSFORM = 'lazy_transform'

__all__ = [
    'CAPABILITY_READ',
    'CAPABILITY_WRITE',
    'CAPABILITY_OWNING',
    'CAPABILITY_LAZY_TRANSFORM',
]
