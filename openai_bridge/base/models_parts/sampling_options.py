"""
Fixed sampling-options structure.

The native API accepts an open-ended ``options`` mapping. Only a handful of
keys have an OpenAI-compatible counterpart; they are enumerated in
``RECOGNIZED_OPTION_KEYS`` and validated into :class:`SamplingOptions`. Every
field is independently optional: an absent key leaves the wire field unset so
the remote default applies (never a zero).

Unrecognized keys (``num_ctx``, ``repeat_penalty``, ...) are native-only and
are ignored with a debug event rather than rejected, so a request built for a
local model can still be forwarded unchanged.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import ConversionError
from ..logging import get_logger, log_event


_logger = get_logger("bridge.options")

Number = Union[int, float]

# canonical option key -> SamplingOptions field
RECOGNIZED_OPTION_KEYS: Dict[str, str] = {
    "temperature": "temperature",
    "top_p": "top_p",
    "num_predict": "num_predict",
    "max_tokens": "num_predict",
    "seed": "seed",
    "frequency_penalty": "frequency_penalty",
    "presence_penalty": "presence_penalty",
}

_INTEGER_FIELDS = frozenset({"num_predict", "seed"})


@dataclass(frozen=True)
class SamplingOptions:
    """Validated numeric sampling parameters; ``None`` means "not set"."""

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    num_predict: Optional[int] = None
    seed: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "SamplingOptions":
        """Build options from a native ``options`` mapping.

        Raises:
            ConversionError: A recognized key holds a non-numeric value, or an
                integer-only key (``num_predict``, ``seed``) holds a
                non-integral number.
        """
        if not options:
            return cls()
        values: Dict[str, Number] = {}
        for key, raw in options.items():
            target = RECOGNIZED_OPTION_KEYS.get(key)
            if target is None:
                log_event(_logger, "request.option_ignored", level=logging.DEBUG, key=key)
                continue
            if raw is None:
                continue
            values[target] = _coerce(key, raw, integer=target in _INTEGER_FIELDS)
        return cls(**values)

    def to_wire_params(self) -> Dict[str, Number]:
        """Return the set fields keyed by their chat-completions parameter name."""
        out: Dict[str, Number] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            out["max_tokens" if f.name == "num_predict" else f.name] = value
        return out


def _coerce(key: str, raw: Any, *, integer: bool) -> Number:
    # bool is an int subclass but never a meaningful sampling value.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConversionError(message=f"option {key!r} must be numeric, got {type(raw).__name__}")
    if not math.isfinite(raw):
        raise ConversionError(message=f"option {key!r} must be finite")
    if integer:
        if isinstance(raw, float):
            if not raw.is_integer():
                raise ConversionError(message=f"option {key!r} must be an integer, got {raw!r}")
            return int(raw)
        return raw
    return float(raw)


__all__ = ["SamplingOptions", "RECOGNIZED_OPTION_KEYS"]
