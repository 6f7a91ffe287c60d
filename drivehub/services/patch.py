"""Sparse partial-update payloads.

A :class:`Patch` remembers which keys the caller actually supplied, so an
omitted field (``MISSING``) and a field explicitly set to ``None`` stay
distinguishable all the way down to the validators.
"""
from .messages import FIELD_CANNOT_BE_UPDATED, UNKNOWN_FIELD
from .result import Failure


class _Missing:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()

# never writable through a patch, whatever the entity
DISALLOWED_FIELDS = {
    "id": "Id",
    "drive_id": "Drive id",
    "user_id": "User id",
    "candidate_id": "Candidate id",
    "round_id": "Round id",
    "feedback_id": "Feedback id",
    "created_by": "Created by",
    "created_date": "Created date",
    "created_at": "Created date",
    "updated_date": "Updated date",
    "updated_at": "Updated date",
    "submitted_date": "Submitted date",
    "password": "Password",
    "password_hash": "Password",
}


class Patch:
    def __init__(self, fields=None, **kwargs):
        self._fields = dict(fields or {})
        self._fields.update(kwargs)

    @classmethod
    def from_json(cls, payload):
        if payload is None:
            return cls()
        if not isinstance(payload, dict):
            raise TypeError("patch payload must be a JSON object")
        return cls(payload)

    def __contains__(self, key):
        return key in self._fields

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __repr__(self):
        return f"Patch({self._fields!r})"

    def is_present(self, key):
        return key in self._fields

    def get(self, key, default=MISSING):
        return self._fields.get(key, default)

    def items(self):
        return self._fields.items()

    def keys(self):
        return self._fields.keys()

    def check_fields(self, allowed):
        """Failures for every present key that is disallowed or unknown."""
        failures = []
        for key in self._fields:
            if key in DISALLOWED_FIELDS:
                failures.append(Failure(key, FIELD_CANNOT_BE_UPDATED.format(DISALLOWED_FIELDS[key])))
            elif key not in allowed:
                failures.append(Failure(key, UNKNOWN_FIELD))
        return failures

    def apply(self, obj, fields=None):
        """Copy present keys (optionally restricted to ``fields``) onto ``obj``."""
        for key, value in self._fields.items():
            if fields is not None and key not in fields:
                continue
            setattr(obj, key, value)
