# ldapfilter.utils.escape
from ldap3.utils.conv import escape_filter_chars


def escape_value(v) -> str:
	"""Escape RFC4515 special characters in a filter assertion value.

	Args:
		v (str or bytes or any): Value to escape, non-string values are
			stringified first.

	Returns:
		str: Escaped value, e.g. ``a*b`` becomes ``a\\2ab``.
	"""
	if not isinstance(v, (str, bytes)):
		v = str(v)
	return escape_filter_chars(v)
