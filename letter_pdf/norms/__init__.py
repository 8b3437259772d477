"""Layout norms: zone constants of standardized letter forms."""
from . import din5008a

__all__ = ['din5008a']
