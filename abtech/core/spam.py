"""Bot screening shared by the public forms."""

from typing import Any


def is_spam(honeypot: Any) -> bool:
    """
    A filled-in honeypot field means a bot submitted the form.

    Any truthy value counts, whatever its JSON type, unless it is blank text.
    """
    return bool(honeypot and str(honeypot).strip())
