# Copyright (c) 2026 Signer — MIT License

"""
Compile a passphrase word list into devprims/words.json.

Reads a plain text list, one word per line, or a dice-numbered list in
the diceware layout ("11111<TAB>abacus"). Dice-numbered lines are
sorted by their roll so the word at index i matches roll i.

Handles:
  - Blank lines and "#" comments (skipped)
  - NFKC normalization and zero-width character removal
  - Case insensitive: all words stored lowercase
  - Validation: exactly 7776 unique alphabetic words, else nothing is written

Usage: python tools/compile.py SOURCE [OUTPUT]
"""

import json
import os
import re
import sys

ROOT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")
sys.path.insert(0, ROOT_DIR)

from devprims.password import PASSPHRASE_WORDLIST_SIZE, normalize_word, validate_wordlist  # noqa: E402

OUTPUT_FILE = os.path.join(ROOT_DIR, "devprims", "words.json")

_DICE_LINE = re.compile(r"^([1-6]{5})\s+(\S+)$")


def parse_line(line):
    """Split one source line into (roll, word).

    roll is the 5-dice string for diceware lines, None for plain lines.
    Returns None for blank lines and comments.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    m = _DICE_LINE.match(stripped)
    if m:
        return m.group(1), normalize_word(m.group(2))
    return None, normalize_word(stripped)


def read_wordlist(path):
    """Read and normalize a source list, ordered by dice roll if present."""
    entries = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            parsed = parse_line(line)
            if parsed is not None:
                entries.append(parsed)

    if entries and all(roll is not None for roll, _ in entries):
        entries.sort(key=lambda e: e[0])
    return [word for _, word in entries]


def compile_wordlist(source, output=OUTPUT_FILE):
    words = read_wordlist(source)
    print(f"Read {len(words)} words from {source}")

    try:
        validate_wordlist(words, PASSPHRASE_WORDLIST_SIZE)
    except ValueError as e:
        print(f"ERROR: {e}")
        print("Nothing written.")
        return False

    with open(output, "w", encoding="utf-8") as f:
        json.dump(words, f, ensure_ascii=False, indent=None, separators=(",", ":"))

    size_kb = os.path.getsize(output) / 1024
    print(f"\nSaved {output}")
    print(f"  {len(words)} words, {size_kb:.1f} KB")
    return True


if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print(__doc__.strip().splitlines()[-1])
        sys.exit(2)
    ok = compile_wordlist(*sys.argv[1:])
    sys.exit(0 if ok else 1)
