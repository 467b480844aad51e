from .core import standard_functions

__all__ = ['standard_functions']
