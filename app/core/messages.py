"""User-facing messages that must not vary with the internal outcome."""

DEFAULT_LOCALE = "en"

AUTH_FAILED_MESSAGES = {
    "en": "The email or password you entered is incorrect.",
    "id": "Email atau password yang Anda masukkan salah.",
}

TOO_MANY_ATTEMPTS_MESSAGES = {
    "en": "Too many login attempts. Please try again in {seconds} seconds.",
    "id": "Terlalu banyak percobaan login. Silakan coba lagi dalam {seconds} detik.",
}


def auth_failed_message(locale: str) -> str:
    """Generic login failure message; unknown locales fall back to English."""
    return AUTH_FAILED_MESSAGES.get(locale, AUTH_FAILED_MESSAGES[DEFAULT_LOCALE])


def too_many_attempts_message(locale: str, seconds: int) -> str:
    template = TOO_MANY_ATTEMPTS_MESSAGES.get(
        locale, TOO_MANY_ATTEMPTS_MESSAGES[DEFAULT_LOCALE]
    )
    return template.format(seconds=seconds)
