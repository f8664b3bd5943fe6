################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.filter.component
# Contains the LDAP Filter Component variants. Each component renders the
# RFC4515 fragment that goes inside its enclosing parentheses.

# ---------------------------------- IMPORTS -----------------------------------#
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple, Union, TYPE_CHECKING
from ldapfilter.constants import (
	LDAP_ATTR_OBJECT_CLASS,
	LDAP_FILTER_AND,
	LDAP_FILTER_OR,
	LDAP_FILTER_NOT,
	LDAP_FILTER_WILDCARD,
	LDAP_FILTER_OPERATORS,
)
from ldapfilter.exceptions.filter import ExpressionError, FilterArgumentError
from ldapfilter.filter.tokens import split_item

if TYPE_CHECKING:
	from ldapfilter.filter.main import Filter
################################################################################


class FilterOp(Enum):
	"""Enum representing the filter combinators"""
	AND = LDAP_FILTER_AND
	OR = LDAP_FILTER_OR
	NOT = LDAP_FILTER_NOT


class SimpleItemType(Enum):
	"""Enum representing all Simple Item comparison types"""
	EQUAL = "equal"
	APPROX = "approx"
	GREATER = "greater"
	LESS = "less"

	@property
	def operator(self) -> str:
		return LDAP_FILTER_OPERATORS[self.value]

	@classmethod
	def from_operator(cls, op: str) -> "SimpleItemType":
		for t in cls:
			if t.operator == op:
				return t
		raise FilterArgumentError(f"Unsupported operator: {op}")

	@classmethod
	def coerce(cls, v: Union["SimpleItemType", str]) -> "SimpleItemType":
		"""Accepts a SimpleItemType or its name ("greater", "GREATER")."""
		if isinstance(v, cls):
			return v
		if isinstance(v, str):
			try:
				return cls(v.lower())
			except ValueError:
				pass
		raise FilterArgumentError(f"Unsupported filter type: {v}")


class FilterComponent(ABC):
	"""Base class for every LDAP Filter grammar production"""

	@abstractmethod
	def to_string(self) -> str:
		"""Render the fragment without enclosing parentheses"""

	@property
	def promiscuous(self) -> bool:
		"""Whether this component matches every directory entry"""
		return False

	def __str__(self) -> str:
		return self.to_string()


@dataclass(frozen=True)
class PresenceComponent(FilterComponent):
	attribute: str = LDAP_ATTR_OBJECT_CLASS

	def to_string(self) -> str:
		return f"{self.attribute}={LDAP_FILTER_WILDCARD}"

	@property
	def promiscuous(self) -> bool:
		# Attribute descriptions are case-insensitive
		return self.attribute.lower() == LDAP_ATTR_OBJECT_CLASS.lower()


@dataclass(frozen=True)
class SimpleItemComponent(FilterComponent):
	attribute: str
	value: str
	filtertype: SimpleItemType = SimpleItemType.EQUAL

	def __post_init__(self):
		object.__setattr__(self, "attribute", str(self.attribute))
		object.__setattr__(self, "value", str(self.value))
		object.__setattr__(self, "filtertype", SimpleItemType.coerce(self.filtertype))

	@property
	def filtertype_op(self) -> str:
		return self.filtertype.operator

	def with_filtertype(self, filtertype: Union[SimpleItemType, str]) -> "SimpleItemComponent":
		"""Returns a copy of this item with another comparison type."""
		return replace(self, filtertype=filtertype)

	def to_string(self) -> str:
		return f"{self.attribute}{self.filtertype_op}{self.value}"

	@classmethod
	def parse_from_string(cls, s: str) -> "SimpleItemComponent":
		"""Parse an ``attribute<op>value`` fragment into a Simple Item.

		Raises:
			ExpressionError: Raised if the fragment has no attribute or
				comparison operator.
		"""
		parts = split_item(s)
		if not parts:
			raise ExpressionError(
				f"Unable to parse simple item '{s}'", fragment=s
			)
		attribute, op, value = parts
		return cls(attribute, value, SimpleItemType.from_operator(op))


@dataclass(frozen=True)
class SubstringItemComponent(FilterComponent):
	attribute: str
	pattern: str

	def __post_init__(self):
		# Without a wildcard the pattern would render as an equality or presence
		if (
			LDAP_FILTER_WILDCARD not in self.pattern
			or self.pattern == LDAP_FILTER_WILDCARD
		):
			raise FilterArgumentError(
				f"Substring pattern '{self.pattern}' for '{self.attribute}' "
				"requires a wildcard next to a value"
			)

	@property
	def parts(self) -> List[str]:
		"""Pattern split on its wildcards, empty strings mark a leading or
		trailing wildcard."""
		return self.pattern.split(LDAP_FILTER_WILDCARD)

	def to_string(self) -> str:
		return f"{self.attribute}={self.pattern}"

	@classmethod
	def from_parts(cls, attribute: str, parts: List[str]) -> "SubstringItemComponent":
		return cls(attribute, LDAP_FILTER_WILDCARD.join(parts))

	@classmethod
	def parse_from_string(cls, s: str) -> "SubstringItemComponent":
		"""Parse an ``attribute=pattern`` fragment where the pattern has at
		least one wildcard and is not a lone ``*`` (that is a presence
		filter).

		Raises:
			ExpressionError: Raised if the fragment is not a substring item.
		"""
		parts = split_item(s)
		if not parts:
			raise ExpressionError(
				f"Unable to parse substring item '{s}'", fragment=s
			)
		attribute, op, pattern = parts
		if (
			op != SimpleItemType.EQUAL.operator
			or LDAP_FILTER_WILDCARD not in pattern
			or pattern == LDAP_FILTER_WILDCARD
		):
			raise ExpressionError(
				f"Unable to parse substring item '{s}'", fragment=s
			)
		return cls(attribute, pattern)


@dataclass(frozen=True, init=False)
class FilterList(FilterComponent):
	"""Concatenation of fully-parenthesized filters with no operator.

	Used to build the clause list of AND and OR components.
	"""
	filters: Tuple["Filter", ...]

	def __init__(self, *filters: "Filter"):
		object.__setattr__(self, "filters", tuple(filters))

	def to_string(self) -> str:
		return "".join(str(f) for f in self.filters)


@dataclass(frozen=True, init=False)
class LogicalComponent(FilterComponent):
	filters: Tuple["Filter", ...]
	operator = None
	min_filters = 1
	max_filters = None

	def __init__(self, *filters: "Filter"):
		if len(filters) < self.min_filters or (
			self.max_filters is not None and len(filters) > self.max_filters
		):
			expected = (
				str(self.min_filters)
				if self.max_filters == self.min_filters
				else f"{self.min_filters}+"
			)
			raise FilterArgumentError(
				f"wrong number of arguments ({len(filters)} for {expected}) "
				f"for {self.__class__.__name__}"
			)
		object.__setattr__(self, "filters", tuple(filters))

	def to_string(self) -> str:
		return f"{self.operator}{FilterList(*self.filters).to_string()}"


class AndComponent(LogicalComponent):
	operator = LDAP_FILTER_AND


class OrComponent(LogicalComponent):
	operator = LDAP_FILTER_OR


class NotComponent(LogicalComponent):
	operator = LDAP_FILTER_NOT
	max_filters = 1

	@property
	def filter(self) -> "Filter":
		return self.filters[0]


LOGICAL_COMPONENTS = {
	LDAP_FILTER_AND: AndComponent,
	LDAP_FILTER_OR: OrComponent,
	LDAP_FILTER_NOT: NotComponent,
}
