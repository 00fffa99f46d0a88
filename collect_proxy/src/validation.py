"""Validación de parámetros y payloads antes de llamar al API de datos.

Every check is a small predicate that either returns or raises
``ValidationError``. Checks are fail-fast: the first failure wins, and the
validator never modifies what it inspects.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import ValidationError, ValidationKind
from .utils import add_months, add_years


TIMEZONE_SUFFIX = re.compile(r"[+-][0-9]{2}:[0-9]{2}$")
ATTRIBUTE_ID = re.compile(r"[0-9]{6}")

VALID_CYCLES = (1, 2, 3, 4, 5)

# Maximum window (hours) per collection cycle
CYCLE_MAX_HOURS: Dict[int, int] = {
    1: 2,      # 1 second
    2: 48,     # 1 minute
    3: 48,     # 5 minutes
    4: 1440,   # 30 minutes
    5: 1440,   # 12 hours
}

INTERVAL_TYPES: Dict[int, str] = {
    0: "Command value",
    1: "1-minute plan",
    2: "30-minute plan",
}

DATA_TYPE1: Dict[int, str] = {
    5: "Actual Value",
    6: "Received Data",
    7: "Processed Data",
    8: "Forecast",
}

MAX_DATA_TYPE_LENGTH = 64
FUTURE_LIMIT_MONTHS = 4
PAST_LIMIT_YEARS = 2

TIMEZONE_MESSAGE = "Timezone is required in format +HH:MM or -HH:MM"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_instant(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _has_offset(value: Any) -> bool:
    return isinstance(value, str) and TIMEZONE_SUFFIX.search(value) is not None


def _described(codes: Mapping[int, str]) -> str:
    listed = ", ".join(str(code) for code in codes)
    meanings = ", ".join(f"{code}: {label}" for code, label in codes.items())
    return f"{listed} ({meanings})"


class RequestValidator:
    """Stateless checks for plan/collect queries and collect payloads.

    ``clock`` returns the current aware datetime; it only feeds the sliding
    window applied to submitted values.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or _utcnow

    # -- shared predicates -------------------------------------------------

    def validate_date_range(self, start: Any, end: Any) -> Tuple[datetime, datetime]:
        if not start or not end:
            raise ValidationError("Both from and to dates are required", ValidationKind.DATE_RANGE)
        if not _has_offset(start) or not _has_offset(end):
            raise ValidationError(TIMEZONE_MESSAGE, ValidationKind.DATE_RANGE)
        from_dt = _parse_instant(start)
        to_dt = _parse_instant(end)
        if from_dt is None or to_dt is None:
            raise ValidationError(
                "Invalid date format. Use ISO8601 format (YYYY-MM-DDThh:mm:ss+TZ)",
                ValidationKind.DATE_RANGE,
            )
        if from_dt.tzinfo is None or to_dt.tzinfo is None:
            raise ValidationError(TIMEZONE_MESSAGE, ValidationKind.DATE_RANGE)
        if from_dt > to_dt:
            raise ValidationError("From date must be before or equal to to date", ValidationKind.DATE_RANGE)
        return from_dt, to_dt

    def validate_cycle(self, cycle: Any) -> None:
        if not _is_int(cycle) or cycle not in VALID_CYCLES:
            raise ValidationError(
                "Invalid cycle value. Must be one of: " + ", ".join(str(c) for c in VALID_CYCLES),
                ValidationKind.CYCLE,
            )

    def validate_interval_type(self, interval_type: Any) -> None:
        if not _is_int(interval_type) or interval_type not in INTERVAL_TYPES:
            raise ValidationError(
                "Invalid intervalType. Must be one of: " + _described(INTERVAL_TYPES),
                ValidationKind.INTERVAL_TYPE,
            )

    def validate_data_type1(self, data_type1: Any) -> None:
        if data_type1 is None:
            return
        if not _is_int(data_type1) or data_type1 not in DATA_TYPE1:
            raise ValidationError(
                "Invalid dataType1. Must be one of: " + _described(DATA_TYPE1),
                ValidationKind.DATA_TYPE,
            )

    def validate_cycle_time_period(self, cycle: Any, start: Any, end: Any) -> None:
        self.validate_cycle(cycle)
        from_dt = self._as_instant(start)
        to_dt = self._as_instant(end)
        hours = (to_dt - from_dt).total_seconds() / 3600
        limit = CYCLE_MAX_HOURS[cycle]
        if hours > limit:
            raise ValidationError(
                f"For cycle {cycle}, maximum time period is {limit} hours",
                ValidationKind.TIME_PERIOD,
            )

    def validate_attribute(self, attr: Any) -> None:
        if not isinstance(attr, dict) or not attr.get("attribute") or not isinstance(attr.get("values"), list):
            raise ValidationError(
                "attribute and values array are required for each attribute", ValidationKind.ATTRIBUTE
            )
        attribute = attr["attribute"]
        if not isinstance(attribute, str) or not ATTRIBUTE_ID.fullmatch(attribute):
            raise ValidationError("attribute must be a 6-digit number string", ValidationKind.ATTRIBUTE)

        self.validate_data_type1(attr.get("dataType1"))

        for field in ("dataType2", "dataType3"):
            value = attr.get(field)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValidationError(f"{field} must be a string", ValidationKind.DATA_TYPE)
            if len(value) > MAX_DATA_TYPE_LENGTH:
                raise ValidationError(
                    f"{field} maximum length is {MAX_DATA_TYPE_LENGTH} characters", ValidationKind.DATA_TYPE
                )

        if not attr["values"]:
            raise ValidationError("values array cannot be empty", ValidationKind.ATTRIBUTE)

    def validate_value(self, point: Any, now: datetime | None = None) -> datetime:
        """Check one value point and return its instant."""
        if not isinstance(point, dict) or not point.get("datetime") or point.get("value") is None:
            raise ValidationError("datetime and value are required for each value", ValidationKind.VALUE)

        raw = point["datetime"]
        moment = _parse_instant(raw)
        if moment is None:
            raise ValidationError(
                "Invalid datetime format. Use ISO8601 format (YYYY-MM-DDThh:mm:ss+TZ)", ValidationKind.VALUE
            )
        if not _has_offset(raw) or moment.tzinfo is None:
            raise ValidationError(TIMEZONE_MESSAGE, ValidationKind.VALUE)

        now = now or self._clock()
        if moment > add_months(now, FUTURE_LIMIT_MONTHS):
            raise ValidationError(
                f"Future data can only be registered up to {FUTURE_LIMIT_MONTHS} months ahead (API specification)",
                ValidationKind.VALUE,
            )
        if moment < add_years(now, -PAST_LIMIT_YEARS):
            raise ValidationError(
                f"Past data can only be registered up to {PAST_LIMIT_YEARS} years ago (API specification)",
                ValidationKind.VALUE,
            )
        return moment

    # -- entry points ------------------------------------------------------

    def validate_plan_query(self, params: Mapping[str, Any]) -> None:
        if not params.get("from") or not params.get("to") or params.get("intervalType") is None:
            raise ValidationError("from, to, and intervalType are required parameters", ValidationKind.REQUIRED)
        self.validate_date_range(params["from"], params["to"])
        self.validate_interval_type(params["intervalType"])

    def validate_collect_query(self, params: Mapping[str, Any]) -> None:
        from_dt, to_dt = self.validate_date_range(params.get("from"), params.get("to"))
        self.validate_cycle(params.get("cycle"))
        self.validate_data_type1(params.get("dataType1"))
        self.validate_cycle_time_period(params["cycle"], from_dt, to_dt)

    def validate_collect_request(self, body: Any) -> None:
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object", ValidationKind.BODY)
        resources = body.get("resources")
        if body.get("cycle") is None or not isinstance(resources, list) or not resources:
            raise ValidationError("cycle and resources array are required", ValidationKind.REQUIRED)

        cycle = body["cycle"]
        self.validate_cycle(cycle)
        self.validate_data_type1(body.get("dataType1"))

        now = self._clock()
        for resource in resources:
            if (
                not isinstance(resource, dict)
                or not resource.get("resourceId")
                or not isinstance(resource.get("attributes"), list)
            ):
                raise ValidationError(
                    "resourceId and attributes array are required for each resource", ValidationKind.REQUIRED
                )
            for attr in resource["attributes"]:
                self.validate_attribute(attr)
                earliest: datetime | None = None
                latest: datetime | None = None
                for point in attr["values"]:
                    moment = self.validate_value(point, now=now)
                    if earliest is None or moment < earliest:
                        earliest = moment
                    if latest is None or moment > latest:
                        latest = moment
                if earliest is not None and latest is not None:
                    self.validate_cycle_time_period(cycle, earliest, latest)

    # -- helpers -----------------------------------------------------------

    def _as_instant(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            moment = value
        else:
            if not _has_offset(value):
                raise ValidationError(TIMEZONE_MESSAGE, ValidationKind.DATE_RANGE)
            moment = _parse_instant(value)
            if moment is None:
                raise ValidationError(
                    "Invalid date format. Use ISO8601 format (YYYY-MM-DDThh:mm:ss+TZ)", ValidationKind.DATE_RANGE
                )
        if moment.tzinfo is None:
            raise ValidationError(TIMEZONE_MESSAGE, ValidationKind.DATE_RANGE)
        return moment
