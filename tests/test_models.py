import pytest

from tutor_cli.models import NotificationPreferences, PrivacySettings, ProfileUpdate, QuizAnswer


def test_profile_update_drops_unset_fields():
    assert ProfileUpdate(name="Ada").to_payload() == {"name": "Ada"}
    assert ProfileUpdate().to_payload() == {}


def test_false_values_are_kept():
    prefs = NotificationPreferences(email_notifications=False, weekly_summary=True)
    assert prefs.to_payload() == {"email_notifications": False, "weekly_summary": True}


def test_from_dict_rejects_unknown_fields():
    with pytest.raises(ValueError, match="unknown PrivacySettings field"):
        PrivacySettings.from_dict({"show_progress": True, "share_location": True})


def test_from_dict_builds_record():
    settings = PrivacySettings.from_dict({"profile_visibility": "friends", "show_progress": False})
    assert settings == PrivacySettings(profile_visibility="friends", show_progress=False)


@pytest.mark.parametrize("text, expected", [
    ("3:true", QuizAnswer(3, True)),
    ("12:no", QuizAnswer(12, False)),
    (" 7 : Correct ", QuizAnswer(7, True)),
])
def test_quiz_answer_parse(text, expected):
    assert QuizAnswer.parse(text) == expected


@pytest.mark.parametrize("text", ["3", "x:true", "3:maybe"])
def test_quiz_answer_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        QuizAnswer.parse(text)


def test_quiz_answer_payload_uses_backend_keys():
    assert QuizAnswer(5, False).to_payload() == {"questionId": 5, "isCorrect": False}


@pytest.mark.parametrize("cls, data", [
    (PrivacySettings, {"show_progress": "maybe"}),
    (NotificationPreferences, {"weekly_summary": 1}),
    (ProfileUpdate, {"name": 42}),
])
def test_from_dict_rejects_wrong_value_types(cls, data):
    with pytest.raises(ValueError, match="must be"):
        cls.from_dict(data)


def test_from_dict_accepts_explicit_none():
    assert ProfileUpdate.from_dict({"bio": None}).to_payload() == {}
