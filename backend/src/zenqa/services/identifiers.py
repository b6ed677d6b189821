import re

MAX_IDENTIFIER_LENGTH = 50
TRUNCATED_PREFIX_LENGTH = 47

# ASCII-only classes: a non-breaking space is punctuation here, not whitespace.
_NON_WORD = re.compile(r"[^a-zA-Z0-9\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+", re.ASCII)


def to_identifier(text: str, index: int) -> str:
	"""
	Turns a free-text test case description into a method-safe identifier.

	"Verify search with valid keywords" -> "test_search_with_valid_keywords".
	Identifiers longer than 50 characters are cut to 47 and suffixed with
	"_<index>" so that truncated names stay unique within a batch.
	For an index of 100 or more the truncated name is longer than 50.
	"""
	identifier = _NON_WORD.sub("", text.lower())
	identifier = _WHITESPACE.sub("_", identifier)
	identifier = identifier.replace("verify_", "test_")

	if len(identifier) > MAX_IDENTIFIER_LENGTH:
		identifier = f"{identifier[:TRUNCATED_PREFIX_LENGTH]}_{index}"

	return identifier
