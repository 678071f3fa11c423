"""Profanity filter for chirp bodies.

Whole words only, case-insensitive. Punctuation counts as part of the
word, so "Kerfuffle!" is left alone.
"""

BAD_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
REPLACEMENT = "****"


def clean_body(body: str) -> str:
    """Replace bad words with ****. Runs of whitespace collapse to one space."""
    return " ".join(
        REPLACEMENT if word.lower() in BAD_WORDS else word for word in body.split()
    )
