"""
Typed request payloads for the tutoring API.

Every record has named optional fields so malformed input is caught before a
request leaves the client. Unset (None) fields are left out of the payload,
which lets the backend apply partial updates.

Classes:
    ProfileUpdate: Fields accepted by PUT /users/profile.
    NotificationPreferences: Fields accepted by PUT /users/notification-preferences.
    PrivacySettings: Fields accepted by PUT /users/privacy-settings.
    QuizAnswer: A single graded answer sent to POST /submit-quiz.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, get_args, get_type_hints


class _Payload:
    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"unknown {cls.__name__} field(s): {', '.join(unknown)}")
        hints = get_type_hints(cls)
        for key, value in data.items():
            expected = tuple(t for t in get_args(hints[key]) if t is not type(None))
            if value is not None and not isinstance(value, expected):
                names = "|".join(t.__name__ for t in expected)
                raise ValueError(
                    f"{cls.__name__}.{key} must be {names}, got {value!r}")
        return cls(**data)

    def to_payload(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ProfileUpdate(_Payload):
    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass
class NotificationPreferences(_Payload):
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    quiz_reminders: Optional[bool] = None
    weekly_summary: Optional[bool] = None


@dataclass
class PrivacySettings(_Payload):
    profile_visibility: Optional[str] = None
    show_progress: Optional[bool] = None
    allow_data_collection: Optional[bool] = None


_TRUE = {"true", "yes", "y", "1", "correct"}
_FALSE = {"false", "no", "n", "0", "wrong"}


@dataclass
class QuizAnswer:
    question_id: int
    is_correct: bool

    @staticmethod
    def parse(text: str) -> "QuizAnswer":
        """Parse the command line form ``<question id>:<true|false>``."""
        qid, sep, verdict = text.partition(":")
        if not sep:
            raise ValueError(f"expected ID:BOOL, got {text!r}")
        try:
            question_id = int(qid.strip())
        except ValueError as e:
            raise ValueError(f"invalid question id in {text!r}") from e
        verdict = verdict.strip().lower()
        if verdict in _TRUE:
            return QuizAnswer(question_id, True)
        if verdict in _FALSE:
            return QuizAnswer(question_id, False)
        raise ValueError(f"invalid verdict in {text!r}")

    def to_payload(self) -> Dict[str, Any]:
        return {"questionId": self.question_id, "isCorrect": self.is_correct}
