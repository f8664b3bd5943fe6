# ldapfilter.utils.iterables
from collections.abc import Mapping


def flatten_list(lst: list[list]) -> list:
	return [i for sub in lst for i in sub]


def is_non_str_iterable(v):
	"""Checks if value is within types (tuple, list, set, frozenset)

	Mappings are not included, they are handled as attribute/value maps
	by the filter expression parser.

	Args:
		v (tuple or list or set or frozenset): Some value to check.

	Returns:
		bool
	"""
	if isinstance(v, (str, bytes)):
		return False
	return isinstance(v, (tuple, list, set, frozenset))


def is_mapping(v) -> bool:
	return isinstance(v, Mapping)
