"""Command plumbing shared by every engine entry point.

A command never raises for an expected business-rule violation: it returns a
:class:`CommandResult` whose ``errors`` list holds :class:`Failure` items.
Raising :class:`Rejected` inside a unit of work is how a command aborts after
it has started mutating; the :func:`command` decorator turns it back into a
result once the session has been rolled back.
"""
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, List, Optional

from flask import current_app

from .messages import MAIN
from .status import UserRole


@dataclass(frozen=True)
class Failure:
    field: str
    message: str

    @classmethod
    def main(cls, message):
        return cls(MAIN, message)

    def to_dict(self):
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Actor:
    """The acting user, passed explicitly into every validator and command."""
    user_id: int
    role: str

    @classmethod
    def from_user(cls, user):
        return cls(user_id=user.id, role=user.role_name)

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @property
    def is_hr(self):
        return self.role == UserRole.HR.value

    def owns(self, drive):
        return drive is not None and drive.created_by == self.user_id


@dataclass
class CommandResult:
    data: Any = None
    warnings: List[str] = field(default_factory=list)
    errors: List[Failure] = field(default_factory=list)

    @property
    def ok(self):
        return not self.errors

    @classmethod
    def rejected(cls, errors, warnings=None):
        return cls(errors=list(errors), warnings=list(warnings or []))

    def to_dict(self):
        if self.ok:
            return {"data": self.data, "warnings": self.warnings}
        return {"errors": [e.to_dict() for e in self.errors], "warnings": self.warnings}


class Rejected(Exception):
    """Abort the current unit of work with validation failures."""

    def __init__(self, failures: List[Failure], warnings: Optional[List[str]] = None):
        super().__init__(", ".join(f.message for f in failures))
        self.failures = list(failures)
        self.warnings = list(warnings or [])


def command(func):
    """Log entry/exit of a command and convert :class:`Rejected` into a result."""
    @wraps(func)
    def wrapped(*args, **kwargs):
        name = func.__name__
        current_app.logger.info("Start - %s", name)
        try:
            result = func(*args, **kwargs)
        except Rejected as exc:
            current_app.logger.info("End - %s - rejected: %s", name, exc)
            return CommandResult.rejected(exc.failures, exc.warnings)
        except Exception as exc:
            current_app.logger.error("End - %s - %r", name, exc)
            raise
        if result.ok:
            current_app.logger.info("End - %s", name)
        else:
            current_app.logger.info("End - %s - rejected: %s", name,
                                    ", ".join(f.message for f in result.errors))
        return result
    return wrapped
