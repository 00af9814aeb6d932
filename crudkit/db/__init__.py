"""
Data-access layer: schema descriptors, table building, field-selection
projection and the generic ``Crud`` base class.
"""

from .errors import FieldError
from .schema import Field, Schema
from .crud import Crud
from .context import CrudContext

__all__ = ["Crud", "CrudContext", "Field", "FieldError", "Schema"]
