"""Default value decoding exports."""

from .gvariant_literals import check_default_in_range, decode_default, decode_range, encode_value
from .literal_models import DefaultValue, ValueRange

__all__ = [
    "DefaultValue",
    "ValueRange",
    "check_default_in_range",
    "decode_default",
    "decode_range",
    "encode_value",
]
