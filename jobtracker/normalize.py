"""
Name normalization for resources: underscoring, pluralizing and
singularizing English nouns.
"""

import re

IRREGULARS = {
    "child": "children",
    "man": "men",
    "person": "people",
    "woman": "women",
}
UNCOUNTABLES = {"data", "equipment", "information", "metadata", "news", "series", "species"}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s\-]+")
_SIBILANT = re.compile(r"(s|x|z|ch|sh)$")
_CONSONANT_Y = re.compile(r"[^aeiou]y$")


def underscore(name: str) -> str:
    """TimePeriod -> time_period, "Job Posting" -> job_posting."""
    name = name.strip().split(".")[-1].split("::")[-1]
    name = _CAMEL_BOUNDARY.sub("_", name)
    return _SEPARATORS.sub("_", name).lower()


def _split_last(name: str):
    head, sep, last = name.rpartition("_")
    return head + sep, last


def pluralize(name: str) -> str:
    head, word = _split_last(name)
    if word in UNCOUNTABLES or word in IRREGULARS.values():
        return name
    if word in IRREGULARS:
        return head + IRREGULARS[word]
    if _CONSONANT_Y.search(word):
        return head + word[:-1] + "ies"
    if _SIBILANT.search(word):
        if word.endswith("ss") or not word.endswith("s"):
            return head + word + "es"
        return name
    return head + word + "s"


def singularize(name: str) -> str:
    head, word = _split_last(name)
    if word in UNCOUNTABLES or word in IRREGULARS:
        return name
    for singular, plural in IRREGULARS.items():
        if word == plural:
            return head + singular
    if word.endswith("ies") and len(word) > 3:
        return head + word[:-3] + "y"
    if re.search(r"(ss|x|z|ch|sh)es$", word):
        return head + word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return head + word[:-1]
    return name
