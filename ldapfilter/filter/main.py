################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.filter.main
# Contains the Filter class, the user facing LDAP Search Filter value.

# ---------------------------------- IMPORTS -----------------------------------#
from typing import List
from ldapfilter.constants import LDAP_FILTER_WILDCARD
from ldapfilter.filter.component import (
	FilterComponent,
	PresenceComponent,
	SimpleItemType,
	AndComponent,
	OrComponent,
	NotComponent,
)
from ldapfilter.filter.parser import (
	FilterExpressionParser,
	FilterStringParser,
	item_component,
)
import logging
################################################################################

logger = logging.getLogger(__name__)


class Filter:
	"""LDAP Search Filter (RFC4515).

	A Filter wraps exactly one FilterComponent and may be built from:

		Filter()                          # (objectClass=*)
		Filter("uid=bargrab")             # (uid=bargrab)
		Filter("uid")                     # (uid=*)
		Filter("uid", "bigthung")         # (uid=bigthung)
		Filter("uid", ["a", "b"])         # (|(uid=a)(uid=b))
		Filter({"cn": "acme"})            # (cn=acme)
		Filter(["and", ["uid", "kunglung"], ["name", "chunger"]])
		Filter(["or", {"uid": ["lar", "bin"]}])
		Filter(["not", ["uid", "kunglung"]])

	Filters are immutable, compare equal when their components are equal and
	combine with ``+`` / ``&`` (AND), ``|`` (OR) and ``~`` (NOT).
	"""
	__slots__ = ("_component",)

	def __init__(self, *expression):
		self._component: FilterComponent = FilterExpressionParser(
			Filter
		).parse_expression(expression)

	@property
	def component(self) -> FilterComponent:
		return self._component

	@property
	def promiscuous(self) -> bool:
		"""Whether this filter matches every directory entry"""
		return self._component.promiscuous

	def with_component(self, component: FilterComponent) -> "Filter":
		"""Returns a new Filter wrapping another component."""
		if not isinstance(component, FilterComponent):
			raise TypeError("component must be a FilterComponent instance.")
		return Filter(component)

	def to_string(self) -> str:
		"""Convert filter to LDAP filter string"""
		return f"({self._component.to_string()})"

	def __str__(self) -> str:
		return self.to_string()

	def __repr__(self) -> str:
		return f"Filter({self.to_string()!r})"

	def __eq__(self, other) -> bool:
		if not isinstance(other, Filter):
			return NotImplemented
		return self._component == other._component

	def __hash__(self) -> int:
		return hash(self._component)

	@staticmethod
	def _coerce(other):
		if isinstance(other, Filter):
			return other
		if isinstance(other, (FilterComponent, str)):
			return Filter(other)
		return None

	def combine(self, other) -> "Filter":
		"""Join two filters with AND.

		A promiscuous operand is left out, so the other operand is returned
		unchanged.
		"""
		other_filter = self._coerce(other)
		if other_filter is None:
			raise TypeError(f"Cannot combine Filter with {type(other).__name__}.")
		if self.promiscuous:
			return other_filter
		if other_filter.promiscuous:
			return self
		logger.debug("Combining %s and %s", self, other_filter)
		return Filter(AndComponent(self, other_filter))

	def __add__(self, other) -> "Filter":
		other_filter = self._coerce(other)
		if other_filter is None:
			return NotImplemented
		return self.combine(other_filter)

	def __and__(self, other) -> "Filter":
		return self.__add__(other)

	def __or__(self, other) -> "Filter":
		other_filter = self._coerce(other)
		if other_filter is None:
			return NotImplemented
		# Anything ORed with a match-all filter matches everything
		if self.promiscuous:
			return self
		if other_filter.promiscuous:
			return other_filter
		return Filter(OrComponent(self, other_filter))

	def __invert__(self) -> "Filter":
		return Filter(NotComponent(self))

	# Factory methods
	@classmethod
	def parse(cls, s: str) -> "Filter":
		"""Parse an LDAP filter string into a Filter instance.

		Raises:
			TypeError: Raised if s is not a string.
			ExpressionError: Raised if s is not a valid filter.
		"""
		return cls(FilterStringParser(s, Filter).parse())

	@classmethod
	def and_(cls, *filters: "Filter") -> "Filter":
		"""Filter Expression AND, requires one or more children filters.

		Raises:
			FilterArgumentError: Raised if no filter children are passed.

		Returns:
			Filter: LDAP Filter with AND Expression applied to children.
		"""
		return cls(AndComponent(*filters))

	@classmethod
	def or_(cls, *filters: "Filter") -> "Filter":
		"""Filter Expression OR, requires one or more children filters.

		Raises:
			FilterArgumentError: Raised if no filter children are passed.

		Returns:
			Filter: LDAP Filter with OR Expression applied to children.
		"""
		return cls(OrComponent(*filters))

	@classmethod
	def not_(cls, filter: "Filter") -> "Filter":
		"""Filter Expression NOT, requires a single child filter."""
		return cls(NotComponent(filter))

	@classmethod
	def eq(cls, attribute: str, value) -> "Filter":
		"""LDAP Filter Equality Comparison, requires attribute and value.

		Args:
			attribute (str): LDAP Attribute Field
			value (str): LDAP Attribute Value

		Returns:
			Filter: Corresponding LDAP Filter.
		"""
		return cls(FilterExpressionParser(Filter).simple_item(attribute, value))

	@classmethod
	def has(cls, attribute: str) -> "Filter":
		"""LDAP Filter Presence Comparison, requires attribute field."""
		return cls(PresenceComponent(attribute))

	@classmethod
	def substr(cls, attribute: str, parts: List[str]) -> "Filter":
		"""LDAP Filter Substring Comparison, requires attribute and parts.

		Use empty string to manually insert wildcard at start or end of filter,
		otherwise will only add wildcard between parts. A single part has no
		wildcard and gives an equality filter, ``["", ""]`` gives a presence
		filter.

		Args:
			attribute (str): LDAP Attribute Field
			parts (list[str]): LDAP Attribute Value parts

		Returns:
			Filter: Corresponding LDAP Filter with substring match.
		"""
		return cls(item_component(attribute, LDAP_FILTER_WILDCARD.join(parts)))

	@classmethod
	def ge(cls, attribute: str, value) -> "Filter":
		return cls(
			FilterExpressionParser(Filter).simple_item(
				attribute, value, SimpleItemType.GREATER
			)
		)

	@classmethod
	def le(cls, attribute: str, value) -> "Filter":
		return cls(
			FilterExpressionParser(Filter).simple_item(
				attribute, value, SimpleItemType.LESS
			)
		)

	@classmethod
	def approximate(cls, attribute: str, value) -> "Filter":
		return cls(
			FilterExpressionParser(Filter).simple_item(
				attribute, value, SimpleItemType.APPROX
			)
		)
