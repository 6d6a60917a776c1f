"""
Builds the FROM/WHERE part of the system activity log search.

The result is a ``(fragment, params)`` pair meant for ``sqlalchemy.text``:
the fragment references bind parameters as ``:name`` and ``params`` maps each
``name`` to its value. Callers prepend the SELECT list and append ordering and
pagination themselves.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from activity_log.core.utils.enums.activity_priority_enum import ActivityPriority


BASE_FRAGMENT = (
    "FROM activity_system m "
    "LEFT JOIN admin a ON m.admin_id = a.id "
    "LEFT JOIN client c ON m.client_id = c.id"
)

_ENABLED_VALUES = {"yes", "true", "1", "on"}


@dataclass(frozen=True)
class Predicate:
    clause: str
    params: dict[str, Any] = field(default_factory=dict)


PredicateRule = Callable[[Mapping[str, Any]], Optional[Predicate]]


def _is_enabled(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _ENABLED_VALUES
    return False


def _coerce_priority(value: Any) -> Any:
    # only strings int() accepts are coerced; "²" and "₃" pass through
    if isinstance(value, str) and value.strip().lstrip("-").isdecimal():
        return int(value.strip())
    return value


def only_clients_rule(filters: Mapping[str, Any]) -> Optional[Predicate]:
    if _is_enabled(filters.get("only_clients")):
        return Predicate("m.client_id IS NOT NULL")
    return None


def only_staff_rule(filters: Mapping[str, Any]) -> Optional[Predicate]:
    if _is_enabled(filters.get("only_staff")):
        return Predicate("m.admin_id IS NOT NULL")
    return None


def priority_rule(filters: Mapping[str, Any]) -> Optional[Predicate]:
    priority = filters.get("priority")
    if priority is None or priority == "":
        return None
    return Predicate("m.priority = :priority", {"priority": _coerce_priority(priority)})


def search_rule(filters: Mapping[str, Any]) -> Optional[Predicate]:
    search = filters.get("search")
    if search is None or not str(search).strip():
        return None
    pattern = f"%{search}%"
    return Predicate(
        "m.message LIKE :search OR m.ip LIKE :search_ip",
        {"search": pattern, "search_ip": pattern},
    )


def severity_threshold_rule(filters: Mapping[str, Any]) -> Optional[Predicate]:
    # no_info hides info and debug, no_debug only debug; the stricter one wins.
    # Binds its own name so it never clobbers the exact priority filter.
    if _is_enabled(filters.get("no_info")):
        threshold = ActivityPriority.INFO
    elif _is_enabled(filters.get("no_debug")):
        threshold = ActivityPriority.DEBUG
    else:
        return None
    return Predicate(
        "m.priority < :priority_threshold",
        {"priority_threshold": int(threshold)},
    )


SEARCH_RULES: tuple[PredicateRule, ...] = (
    only_clients_rule,
    only_staff_rule,
    priority_rule,
    search_rule,
    severity_threshold_rule,
)


def build_search_query(
    filters: Optional[Mapping[str, Any]] = None,
) -> tuple[str, dict[str, Any]]:
    """
    Translate activity search filters into a SQL fragment and its bind values.

    Recognised keys are ``only_clients``, ``only_staff``, ``priority``,
    ``search``, ``no_info`` and ``no_debug``; anything else is ignored.
    Predicates are AND-ed in rule order, each one parenthesised.
    """
    filters = filters or {}
    clauses: list[str] = []
    params: dict[str, Any] = {}

    for rule in SEARCH_RULES:
        predicate = rule(filters)
        if predicate is None:
            continue
        clauses.append(f"({predicate.clause})")
        params.update(predicate.params)

    fragment = BASE_FRAGMENT
    if clauses:
        fragment += " WHERE " + " AND ".join(clauses)
    return fragment, params
