"""Extend the default JSON encoder to the numeric and value types used by the pricing engine."""
import json
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from fixedpointmath import FixedPoint


class ExtendedJSONEncoder(json.JSONEncoder):
    r"""Custom encoder for JSON string dumps.

    Decimals and FixedPoints are written as strings so no digits are lost to floats.
    """

    def default(self, o: Any) -> Any:
        """Override default behavior.

        Arguments
        ---------
        o: Any
            The object to be converted to JSON.

        Returns
        -------
        Any
            The corresponding object ready to be serialized to JSON.
        """
        if isinstance(o, FixedPoint):
            return str(o)
        if isinstance(o, Decimal):
            return str(o)
        if isinstance(o, Enum):
            return o.name
        if isinstance(o, Exception):
            return repr(o)
        if is_dataclass(o) and not isinstance(o, type):
            out = asdict(o)
            out.update({"class_name": o.__class__.__name__})
            return out
        # Let the base class default method raise the TypeError
        return json.JSONEncoder.default(self, o)
