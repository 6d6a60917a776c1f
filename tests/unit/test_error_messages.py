from activity_log.core.exceptions.error_messages import ERROR_MESSAGES, ErrorKey, get_error_message


def test_every_key_has_english_message():
    assert set(ERROR_MESSAGES["en"]) == set(ErrorKey)

def test_error_variables_are_formatted():
    message = get_error_message(ErrorKey.ACTIVITY_NOT_FOUND, error_variables=("12",))

    assert message == "Activity log entry #12 not found."

def test_translation():
    assert get_error_message(ErrorKey.CLIENT_NOT_FOUND, lang="fr") == "Client introuvable"

def test_missing_translation_falls_back_to_english():
    assert get_error_message(ErrorKey.EMAIL_NOT_FOUND, lang="fr") == "Email not found."

def test_unsupported_language_uses_default():
    assert get_error_message(ErrorKey.NOT_FOUND, lang="de") == "Resource not found."
