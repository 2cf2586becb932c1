# ldbridge meta data
__all__ = [
    '__copyright__', '__license__', '__version__'
]

__copyright__ = 'Copyright (c) 2017-2026 ldbridge contributors'
__license__ = 'Apache License, Version 2.0'
__version__ = '1.0.0'
