"""
expander.py — Multi-value parameter expansion.

The XBRL US API accepts comma-separated lists for some parameters (CIK,
Element on xbrlValues, ...) and only a single identifier for others (Element
on most lookups). Callers may pass a list for either; this module turns the
call into one request with joined values or into one request per value,
according to the policy each operation declares for each parameter.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

JOIN_DELIMITER = ", "


class ParamPolicy(str, Enum):
    SCALAR = "scalar"  # single value only
    JOIN = "join"  # list sent as one comma-joined value
    FANOUT = "fanout"  # one request per value


@dataclass(frozen=True)
class Scalar:
    value: str


@dataclass(frozen=True)
class Multi:
    values: Tuple[str, ...]


ParamValue = Union[Scalar, Multi]


@dataclass(frozen=True)
class OperationRequest:
    """One remote call: task name, ordered query parameters, key flag."""
    task: str
    params: Tuple[Tuple[str, str], ...]
    requires_credential: bool = True

    def params_dict(self) -> Dict[str, str]:
        return dict(self.params)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_param_value(value: Any) -> Optional[ParamValue]:
    """
    Resolve a caller-supplied value into Scalar, Multi or None (absent).

    Strings are scalars, never sequences of characters. Empty sequences are
    absent; single-element sequences collapse to a Scalar.
    """
    if value is None:
        return None
    if isinstance(value, str) or not _is_iterable(value):
        return Scalar(_to_text(value))

    values = tuple(_to_text(v) for v in value if v is not None)
    if not values:
        return None
    if len(values) == 1:
        return Scalar(values[0])
    return Multi(values)


def _is_iterable(value: Any) -> bool:
    if isinstance(value, Mapping):
        return False
    try:
        iter(value)
    except TypeError:
        return False
    return True


def expand_requests(
    task: str,
    policies: Mapping[str, ParamPolicy],
    params: Mapping[str, Any],
    requires_credential: bool = True,
) -> List[OperationRequest]:
    """
    Build the ordered list of requests for one logical call.

    Parameters appear in the order `policies` declares them. JOIN lists are
    joined with ", ". FANOUT lists produce one request per value; several
    multi-valued FANOUT parameters produce their cartesian product, the
    first declared parameter varying slowest.

    Raises:
        TypeError: for a parameter the operation does not declare.
        ValueError: for a list passed to a SCALAR parameter.
    """
    unknown = [name for name in params if name not in policies]
    if unknown:
        raise TypeError(f"{task} does not accept parameter(s): {', '.join(unknown)}")

    fixed: Dict[str, str] = {}
    fanout: Dict[str, Tuple[str, ...]] = {}

    for name, policy in policies.items():
        resolved = to_param_value(params.get(name))
        if resolved is None:
            continue
        if isinstance(resolved, Scalar):
            fixed[name] = resolved.value
        elif policy is ParamPolicy.JOIN:
            fixed[name] = JOIN_DELIMITER.join(resolved.values)
        elif policy is ParamPolicy.FANOUT:
            fanout[name] = resolved.values
        else:
            raise ValueError(f"{task} parameter {name} does not accept multiple values")

    expanded: List[OperationRequest] = []
    for combo in itertools.product(*fanout.values()):
        chosen = dict(zip(fanout.keys(), combo))
        ordered = tuple(
            (name, chosen[name] if name in chosen else fixed[name])
            for name in policies
            if name in chosen or name in fixed
        )
        expanded.append(OperationRequest(task, ordered, requires_credential))
    return expanded
