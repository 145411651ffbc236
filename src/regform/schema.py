"""The registration rule set.

Declarative and side-effect free: each field maps to an ordered chain of
validators. The first failing validator in a chain supplies that field's
message.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from regform.validation import Validator, accepted, max_length, min_length, one_of, required

LANGUAGES = ("javascript", "rust")
FOODS = ("pizza", "spaghetti", "broccoli")

USERNAME_MIN = 3
USERNAME_MAX = 20

# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

USERNAME_REQUIRED = "Username is required"
USERNAME_MIN_MESSAGE = "Username must be at least 3 characters"
USERNAME_MAX_MESSAGE = "Username cannot exceed 20 characters"
LANGUAGE_REQUIRED = "Favorite language is required"
LANGUAGE_OPTIONS = "Favorite language must be either JavaScript or Rust"
FOOD_REQUIRED = "Favorite food is required"
FOOD_OPTIONS = "Favorite food must be either broccoli, spaghetti, or pizza"
AGREEMENT_REQUIRED = "Agreement is required"

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

REGISTRATION_RULES: Mapping[str, Sequence[Validator]] = MappingProxyType({
    "username": (
        required(USERNAME_REQUIRED),
        min_length(USERNAME_MIN, USERNAME_MIN_MESSAGE),
        max_length(USERNAME_MAX, USERNAME_MAX_MESSAGE),
    ),
    "favLanguage": (
        required(LANGUAGE_REQUIRED),
        one_of(*LANGUAGES, message=LANGUAGE_OPTIONS),
    ),
    "favFood": (
        required(FOOD_REQUIRED),
        one_of(*FOODS, message=FOOD_OPTIONS),
    ),
    # A boolean is always present, so "required" and "accepted" are one check
    "agreement": (accepted(AGREEMENT_REQUIRED),),
})
