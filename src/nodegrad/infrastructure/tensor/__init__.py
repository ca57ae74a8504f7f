from ._data import DEFAULT_DTYPE, Data
from ._shape import Shape, as_shape

__all__ = [
    "DEFAULT_DTYPE",
    Data.__name__,
    Shape.__name__,
    "as_shape",
]
