################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.utils.rdn
# Attribute/value extraction from the leading RDN of a Distinguished Name,
# used to seed the initial attributes of a new entry.

# ---------------------------------- IMPORTS -----------------------------------#
from typing import Dict, List, Tuple
import re
from ldapfilter.exceptions.filter import ExpressionError
from ldapfilter.filter.tokens import split_pair
################################################################################

# Separators preceded by a backslash are escaped and belong to the value
RDN_SEPARATOR_RE = re.compile(r"(?<!\\)\s*,\s*")
RDN_MULTIVALUE_RE = re.compile(r"(?<!\\)\+")


def get_rdn(dn: str) -> str:
	"""Returns the leading RDN of a Distinguished Name.

	Args:
		dn (str): Distinguished Name, e.g. ``uid=foo+cn=bar,ou=people``

	Returns:
		str: Leading RDN, e.g. ``uid=foo+cn=bar``
	"""
	if not isinstance(dn, str):
		raise TypeError("dn must be of type str.")
	return RDN_SEPARATOR_RE.split(dn.strip(), maxsplit=1)[0]


def split_rdn_pairs(dn: str) -> List[Tuple[str, str]]:
	"""Split the leading RDN of a DN into its attribute/value pairs.

	Multi-valued RDNs are joined by ``+``, whitespace around ``=`` is
	trimmed.

	Raises:
		ExpressionError: Raised if an RDN piece is not an attribute=value
			pair.
	"""
	r = []
	for piece in RDN_MULTIVALUE_RE.split(get_rdn(dn)):
		pair = split_pair(piece)
		if not pair:
			raise ExpressionError(
				f"Unable to parse RDN attribute pair '{piece}'", fragment=piece
			)
		r.append(pair)
	return r


def rdn_attributes(dn: str) -> Dict[str, List[str]]:
	"""Group the leading RDN pairs of a DN by attribute.

	>>> rdn_attributes("cn=a+cn=b+uid=c,ou=people")
	{'cn': ['a', 'b'], 'uid': ['c']}
	"""
	r: Dict[str, List[str]] = {}
	for k, v in split_rdn_pairs(dn):
		r.setdefault(k, []).append(v)
	return r
