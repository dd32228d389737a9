# Copyright (c) 2026 Signer — MIT License

"""Random passwords and diceware-style passphrases.

Every draw goes through SecureRandom.next_below(), so each character
or word is picked uniformly from its pool with no modulo bias.

Usage:
    from devprims.password import (
        PasswordOptions, PassphraseOptions,
        build_char_pool, generate_password, generate_passphrase,
    )
    pool = build_char_pool(PasswordOptions(symbols=True))
    pw   = generate_password(16, pool)
    pp   = generate_passphrase(PassphraseOptions(word_count=6, separator="space"))
"""

import json
import os
import re
import unicodedata
from dataclasses import dataclass

from .errors import EmptyPoolError
from .secure_random import default_random

# ── Character classes ─────────────────────────────────────────────

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMBERS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

SEPARATORS = {
    "dash": "-",
    "space": " ",
    "dot": ".",
    "underscore": "_",
    "none": "",
}

PASSPHRASE_WORDLIST_SIZE = 7776     # 6**5, five dice per word
_NUMBER_RANGE = 100                 # inserted number is 00..99

_INVISIBLE_CHARS = re.compile(
    "["
    "\u200b"   # zero-width space
    "\u200c"   # zero-width non-joiner
    "\u200d"   # zero-width joiner
    "\u00ad"   # soft hyphen
    "\ufeff"   # BOM / zero-width no-break space
    "\u2060"   # word joiner
    "]"
)


# ── Word list hygiene ─────────────────────────────────────────────

def normalize_word(word):
    """Normalize a word list entry.

    1. Strip whitespace
    2. Remove zero-width / invisible characters
    3. NFKC normalize (full-width → regular, ligatures → letters, etc.)
    4. Lowercase
    """
    w = word.strip()
    w = _INVISIBLE_CHARS.sub("", w)
    w = unicodedata.normalize("NFKC", w)
    return w.lower()


def validate_wordlist(words, expected_size=PASSPHRASE_WORDLIST_SIZE):
    """Check a passphrase word list before it is used for generation.

    Raises:
        ValueError: wrong size, an empty or non-alphabetic entry, or a
            duplicate word.
    """
    if len(words) != expected_size:
        raise ValueError(f"Word list has {len(words)} words, expected {expected_size}")
    seen = set()
    for i, word in enumerate(words):
        if not word or not word.isalpha():
            raise ValueError(f"Invalid word at index {i}: {word!r}")
        if word in seen:
            raise ValueError(f"Duplicate word at index {i}: {word!r}")
        seen.add(word)


# ── Word list data ────────────────────────────────────────────────

_WORDS_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "words.json")

with open(_WORDS_FILE, "r", encoding="utf-8") as _f:
    WORDS = tuple(json.load(_f))

validate_wordlist(WORDS)


# ── Options ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class PasswordOptions:
    lowercase: bool = True
    uppercase: bool = True
    numbers: bool = True
    symbols: bool = False


@dataclass(frozen=True)
class PassphraseOptions:
    word_count: int = 5
    separator: str = "dash"
    capitalize: bool = True
    include_number: bool = False

    def __post_init__(self):
        if self.separator not in SEPARATORS:
            raise ValueError(
                f"Unknown separator: {self.separator!r} "
                f"(expected one of {', '.join(SEPARATORS)})"
            )
        if self.word_count < 0:
            raise ValueError(f"word_count must be >= 0, got {self.word_count}")

    @property
    def separator_char(self):
        return SEPARATORS[self.separator]


# ── Generation ────────────────────────────────────────────────────

def build_char_pool(options):
    """Concatenate the selected classes: lowercase, uppercase, numbers, symbols."""
    pool = ""
    if options.lowercase:
        pool += LOWERCASE
    if options.uppercase:
        pool += UPPERCASE
    if options.numbers:
        pool += NUMBERS
    if options.symbols:
        pool += SYMBOLS
    return pool


def generate_password(length, pool, rng=None):
    """Pick `length` characters uniformly from `pool`.

    Args:
        length: number of characters; 0 returns "".
        pool: characters to choose from (see build_char_pool).
        rng: SecureRandom to draw from; defaults to the OS CSPRNG.

    Raises:
        ValueError: if length is negative.
        EmptyPoolError: if pool is empty and length > 0.
    """
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    if length == 0:
        return ""
    if not pool:
        raise EmptyPoolError("Character pool is empty; select at least one character class")

    rng = rng or default_random()
    return "".join(pool[rng.next_below(len(pool))] for _ in range(length))


def generate_passphrase(options=None, rng=None):
    """Join `word_count` random words, optionally with a two-digit number.

    The number (00-99) lands in one of the word_count + 1 gaps between,
    before or after the words, chosen uniformly.
    """
    options = options or PassphraseOptions()
    rng = rng or default_random()

    words = []
    for _ in range(options.word_count):
        word = WORDS[rng.next_below(len(WORDS))]
        if options.capitalize:
            word = word[:1].upper() + word[1:]
        words.append(word)

    if options.include_number:
        number = f"{rng.next_below(_NUMBER_RANGE):02d}"
        words.insert(rng.next_below(len(words) + 1), number)

    return options.separator_char.join(words)


def generate_passwords(count, length, pool, rng=None):
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    return [generate_password(length, pool, rng) for _ in range(count)]


def generate_passphrases(count, options=None, rng=None):
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    return [generate_passphrase(options, rng) for _ in range(count)]
