"""
Operator constants shared by the MongoDB compilers.
"""

import string

# Aggregate operators, tested in this order
AGGREGATE_OPS = ("$sum", "$avg", "$min", "$max", "$count")

# Field-reference marker key in expressions
FIELD_REF = "$"

NAME_ALPHABET = string.ascii_lowercase

# Body of the $function predicate used by $regexFor: the stored value is the pattern
REGEX_FOR_BODY = "function (data, value) { return new RegExp(data, 'i').test(value) }"
