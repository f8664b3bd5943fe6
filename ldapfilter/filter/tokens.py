################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.filter.tokens
# Attribute / operator / value tokenizer shared by the filter parser, the
# item components and the RDN helpers.

# ---------------------------------- IMPORTS -----------------------------------#
from typing import Optional, Tuple
import re
from ldapfilter.constants import (
	LDAP_FILTER_LPAREN,
	LDAP_FILTER_RPAREN,
	LDAP_FILTER_OPERATORS,
)
################################################################################

# RFC4512 descr (keystring) or numericoid, followed by RFC4515 options
ATTRIBUTE_PATTERN = r"(?:[A-Za-z][A-Za-z0-9\-]*|\d+(?:\.\d+)+)(?:;[A-Za-z0-9\-]+)*"
ATTRIBUTE_RE = re.compile(rf"^\s*({ATTRIBUTE_PATTERN})\s*$")

# Longest operators first so "~=" is never read as "~" + "="
OPERATOR_PATTERN = "|".join(
	re.escape(op) for op in sorted(LDAP_FILTER_OPERATORS.values(), key=len, reverse=True)
)
# Whitespace after the operator belongs to the assertion value
ITEM_RE = re.compile(
	rf"^\s*(?P<attribute>{ATTRIBUTE_PATTERN})\s*(?P<operator>{OPERATOR_PATTERN})(?P<value>.*)$",
	re.DOTALL,
)
PAIR_RE = re.compile(
	rf"^\s*(?P<attribute>{ATTRIBUTE_PATTERN})\s*=\s*(?P<value>.*?)\s*$",
	re.DOTALL,
)


def is_attribute(v: str) -> bool:
	"""Check if a string is a valid attribute description."""
	if not isinstance(v, str):
		return False
	return ATTRIBUTE_RE.match(v) is not None


def is_encapsulated(v: str) -> bool:
	"""Check if a string is wrapped in one balanced pair of parentheses."""
	if not isinstance(v, str):
		raise TypeError("is_encapsulated value must be of type str.")
	if not (v.startswith(LDAP_FILTER_LPAREN) and v.endswith(LDAP_FILTER_RPAREN)):
		return False
	depth = 0
	for i, c in enumerate(v):
		if c == LDAP_FILTER_LPAREN:
			depth += 1
		elif c == LDAP_FILTER_RPAREN:
			depth -= 1
		# Leading paren closed before the end, e.g. "(a=b)(c=d)"
		if depth == 0 and i < len(v) - 1:
			return False
	return depth == 0


def encapsulate(v: str) -> str:
	"""Wrap an LDAP filter string in parentheses unless already wrapped."""
	if is_encapsulated(v):
		return v
	return f"{LDAP_FILTER_LPAREN}{v}{LDAP_FILTER_RPAREN}"


def split_item(v: str) -> Optional[Tuple[str, str, str]]:
	"""Split an ``attribute<op>value`` fragment.

	Whitespace around the attribute is trimmed, the value is kept as written.

	Returns:
		tuple: (attribute, operator, value) or None if the fragment does
		not match.
	"""
	m = ITEM_RE.match(v)
	if not m:
		return None
	return m.group("attribute"), m.group("operator"), m.group("value")


def split_pair(v: str) -> Optional[Tuple[str, str]]:
	"""Split an ``attribute=value`` fragment, as found in RDNs.

	Whitespace around both the attribute and the value is trimmed.

	Returns:
		tuple: (attribute, value) or None if the fragment does not match.
	"""
	m = PAIR_RE.match(v)
	if not m:
		return None
	return m.group("attribute"), m.group("value")
