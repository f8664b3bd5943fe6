################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.filter.parser
# Contains:
# - Recursive descent parser for RFC4515 filter strings
# - Dispatcher for symbolic filter expressions (sequences, pairs, mappings)

# ---------------------------------- IMPORTS -----------------------------------#
from typing import Any, Iterable, List, Optional, Union, TYPE_CHECKING
from ldapfilter.config.runtime import RuntimeSettings
from ldapfilter.constants import (
	LDAP_ATTR_OBJECT_CLASS,
	LDAP_FILTER_LPAREN,
	LDAP_FILTER_RPAREN,
	LDAP_FILTER_WILDCARD,
	LDAP_FILTER_COMBINATOR_TOKENS,
)
from ldapfilter.exceptions.filter import ExpressionError
from ldapfilter.filter.component import (
	FilterComponent,
	FilterOp,
	PresenceComponent,
	SimpleItemComponent,
	SimpleItemType,
	SubstringItemComponent,
	AndComponent,
	OrComponent,
	LOGICAL_COMPONENTS,
)
from ldapfilter.filter.tokens import (
	encapsulate,
	is_attribute,
	is_encapsulated,
	split_item,
)
from ldapfilter.utils.escape import escape_value
from ldapfilter.utils.iterables import flatten_list, is_mapping, is_non_str_iterable
import logging

if TYPE_CHECKING:
	from ldapfilter.filter.main import Filter
################################################################################

logger = logging.getLogger(__name__)


def item_component(
	attribute: str,
	value: str,
	filtertype: SimpleItemType = SimpleItemType.EQUAL,
) -> FilterComponent:
	"""Build the item component a rendered ``attribute<op>value`` reads back as.

	Equality values are a Presence component when they are a lone ``*`` and
	a Substring component when they contain one, other values are a Simple
	Item component.
	"""
	if filtertype == SimpleItemType.EQUAL:
		if value == LDAP_FILTER_WILDCARD:
			return PresenceComponent(attribute)
		if LDAP_FILTER_WILDCARD in value:
			return SubstringItemComponent(attribute, value)
	return SimpleItemComponent(attribute, value, filtertype)


def parse_item(fragment: str) -> FilterComponent:
	"""Parse the inside of a non-combinator filter, e.g. ``uid=foo``.

	Returns a Presence component for ``attr=*`` or a bare ``attr``, a
	Substring component when an equality value has wildcards, and a Simple
	Item component otherwise.
	"""
	parts = split_item(fragment)
	if not parts:
		if is_attribute(fragment):
			return PresenceComponent(fragment.strip())
		raise ExpressionError(
			f"Unable to parse filter item '{fragment}'", fragment=fragment
		)

	attribute, op, value = parts
	return item_component(attribute, value, SimpleItemType.from_operator(op))


class FilterStringParser:
	"""Recursive descent parser for RFC4515 filter strings.

	filter     = "(" filtercomp ")"
	filtercomp = and / or / not / item
	and        = "&" filterlist
	or         = "|" filterlist
	not        = "!" filter
	filterlist = 1*filter

	Strings without enclosing parentheses are wrapped before parsing.
	"""

	def __init__(self, text: str, filter_class, max_depth: Optional[int] = None):
		if not isinstance(text, str):
			raise TypeError("LDAP Filter string must be of type str.")
		self.source = text
		text = text.strip()
		# Unbalanced strings starting with "(" are left as-is so the error
		# points at the actual mismatch
		self.text = text if text.startswith(LDAP_FILTER_LPAREN) else encapsulate(text)
		self.pos = 0
		self.filter_class = filter_class
		self.max_depth = (
			RuntimeSettings.LDAP_FILTER_MAX_DEPTH if max_depth is None else max_depth
		)

	def parse(self) -> FilterComponent:
		logger.debug("Parsing filter string: %s", self.source)
		component = self._parse_filter(depth=0)
		self._skip_whitespace()
		if self.pos != len(self.text):
			raise ExpressionError(
				f"Unable to parse '{self.source}', unexpected characters "
				f"'{self.text[self.pos:]}' after filter",
				fragment=self.source,
			)
		return component

	def _peek(self) -> str:
		if self.pos < len(self.text):
			return self.text[self.pos]
		return ""

	def _skip_whitespace(self) -> None:
		while self._peek().isspace():
			self.pos += 1

	def _expect(self, c: str) -> None:
		if self._peek() != c:
			found = self._peek() or "end of filter"
			raise ExpressionError(
				f"Unable to parse '{self.source}', expected '{c}' at "
				f"position {self.pos} but found '{found}'",
				fragment=self.source,
			)
		self.pos += 1

	def _parse_filter(self, depth: int) -> FilterComponent:
		self._skip_whitespace()
		self._expect(LDAP_FILTER_LPAREN)
		component = self._parse_filtercomp(depth)
		self._skip_whitespace()
		self._expect(LDAP_FILTER_RPAREN)
		return component

	def _parse_filtercomp(self, depth: int) -> FilterComponent:
		self._skip_whitespace()
		op = self._peek()
		if op in LOGICAL_COMPONENTS:
			if depth >= self.max_depth:
				raise ExpressionError(
					f"Unable to parse '{self.source}', filter nesting exceeds "
					f"{self.max_depth} levels",
					fragment=self.source,
				)
			self.pos += 1
			return self._parse_logical(op, depth + 1)
		return self._parse_item()

	def _parse_logical(self, op: str, depth: int) -> FilterComponent:
		filters = []
		self._skip_whitespace()
		while self._peek() == LDAP_FILTER_LPAREN:
			filters.append(self.filter_class(self._parse_filter(depth)))
			self._skip_whitespace()

		if not filters:
			raise ExpressionError(
				f"Unable to parse '{self.source}', '{op}' expression has no filters",
				fragment=self.source,
			)
		if op == FilterOp.NOT.value and len(filters) > 1:
			raise ExpressionError(
				f"Unable to parse '{self.source}', '{op}' expression takes "
				f"exactly one filter ({len(filters)} given)",
				fragment=self.source,
			)
		return LOGICAL_COMPONENTS[op](*filters)

	def _parse_item(self) -> FilterComponent:
		end = self.text.find(LDAP_FILTER_RPAREN, self.pos)
		if end == -1:
			end = len(self.text)
		fragment = self.text[self.pos:end]
		if LDAP_FILTER_LPAREN in fragment:
			raise ExpressionError(
				f"Unable to parse filter item '{fragment}', unescaped '(' in value",
				fragment=fragment,
			)
		self.pos = end
		return parse_item(fragment)


class FilterExpressionParser:
	"""Dispatches a filter expression to the component it describes.

	Accepted expressions:
	- Nothing: the promiscuous ``(objectClass=*)`` filter.
	- A string literal, parsed with FilterStringParser.
	- A Filter or FilterComponent, used as-is.
	- An ``(attribute, value)`` pair: an equality item, or an OR of equality
	  items when the value is a list.
	- A mapping of attribute to value(s).
	- A sequence headed by a combinator (``"and"``, ``"&"``, ``"or"``, ``"|"``,
	  ``"not"``, ``"!"`` or a FilterOp) followed by clause expressions.
	"""

	def __init__(
		self,
		filter_class,
		escape_values: Optional[bool] = None,
		max_depth: Optional[int] = None,
	):
		self.filter_class = filter_class
		self.escape_values = (
			RuntimeSettings.LDAP_FILTER_ESCAPE_VALUES
			if escape_values is None
			else escape_values
		)
		self.max_depth = (
			RuntimeSettings.LDAP_FILTER_MAX_DEPTH if max_depth is None else max_depth
		)
		self._depth = 0

	@staticmethod
	def get_combinator(token: Any) -> Optional[str]:
		"""Returns the combinator symbol for a sequence head, or None."""
		if isinstance(token, FilterOp):
			return token.value
		if isinstance(token, str):
			return LDAP_FILTER_COMBINATOR_TOKENS.get(token.lower())
		return None

	def wrap(self, component: FilterComponent) -> "Filter":
		return self.filter_class(component)

	def parse_expression(self, expression: tuple) -> FilterComponent:
		if not expression:
			return PresenceComponent(LDAP_ATTR_OBJECT_CLASS)
		if len(expression) == 1:
			return self.parse_literal(expression[0])
		return self.parse_sequence(expression)

	def parse_literal(self, v: Any) -> FilterComponent:
		if isinstance(v, FilterComponent):
			return v
		if isinstance(v, self.filter_class):
			return v.component
		if isinstance(v, str):
			return FilterStringParser(v, self.filter_class).parse()
		if is_mapping(v):
			return self.parse_mapping(v)
		if isinstance(v, (list, tuple)):
			return self.parse_sequence(v)
		raise ExpressionError(
			f"Unable to parse filter expression of type {type(v).__name__}: {v!r}",
			fragment=repr(v),
		)

	def parse_sequence(self, seq: Iterable) -> FilterComponent:
		seq = list(seq)
		# Unwrap single element lists without recursing, e.g. [[["uid", "a"]]]
		while len(seq) == 1 and isinstance(seq[0], (list, tuple)):
			seq = list(seq[0])
		if not seq:
			raise ExpressionError("Unable to parse an empty filter expression")

		op = self.get_combinator(seq[0])
		if op is not None:
			return self.parse_logical_expression(op, seq[1:])
		if len(seq) == 1:
			return self.parse_literal(seq[0])
		if len(seq) == 2:
			return self.parse_pair(*seq)
		raise ExpressionError(
			f"Unable to parse filter expression {seq!r}", fragment=repr(seq)
		)

	def parse_logical_expression(
		self,
		op: Union[FilterOp, str],
		clauses: Iterable,
	) -> FilterComponent:
		"""Build an AND, OR or NOT component from its clause expressions.

		Raises:
			ExpressionError: Raised if op is not a known combinator or the
				expression nests deeper than max_depth.
			FilterArgumentError: Raised if the clause count is invalid for
				the combinator.
		"""
		token = self.get_combinator(op)
		if token is None:
			raise ExpressionError(
				f"Unable to parse unknown filter combinator {op!r}",
				fragment=repr(op),
			)
		if self._depth >= self.max_depth:
			raise ExpressionError(
				f"Unable to parse filter expression, nesting exceeds "
				f"{self.max_depth} levels",
				fragment=repr(op),
			)
		self._depth += 1
		try:
			filters = [
				self.wrap(self.parse_literal(clause))
				for clause in self.expand_clauses(clauses)
			]
		finally:
			self._depth -= 1
		logger.debug(
			"Building %s expression with %d clause(s)",
			LOGICAL_COMPONENTS[token].__name__,
			len(filters),
		)
		return LOGICAL_COMPONENTS[token](*filters)

	def expand_clauses(self, clauses: Iterable) -> List[Any]:
		"""Flatten clause expressions that stand for more than one clause.

		- ``{"uid": ["a", "b"]}`` becomes one equality clause per value.
		- ``["cn~=facet", "cn=structure"]`` becomes one clause per string.
		"""
		return flatten_list([self._expand_clause(c) for c in clauses])

	def _expand_clause(self, clause: Any) -> List[Any]:
		if is_mapping(clause):
			r = []
			for attribute, values in clause.items():
				if is_non_str_iterable(values):
					r.extend(self.simple_item(attribute, v) for v in values)
				else:
					r.append(self.simple_item(attribute, values))
			return r
		if self.is_filter_string_list(clause):
			return list(clause)
		return [clause]

	@staticmethod
	def is_filter_string_list(v: Any) -> bool:
		"""Whether v is a list of filter strings rather than an attribute
		and value pair, checked on its first element."""
		if not isinstance(v, (list, tuple)) or not v:
			return False
		if not all(isinstance(i, str) for i in v):
			return False
		first = v[0].strip()
		return bool(first) and (
			is_encapsulated(first) or split_item(first) is not None
		)

	def parse_pair(self, attribute: Any, value: Any) -> FilterComponent:
		if is_non_str_iterable(value):
			values = list(value)
			if not values:
				raise ExpressionError(
					f"Unable to parse attribute '{attribute}' with no values",
					fragment=repr(attribute),
				)
			return OrComponent(
				*[self.wrap(self.simple_item(attribute, v)) for v in values]
			)
		return self.simple_item(attribute, value)

	def parse_mapping(self, m) -> FilterComponent:
		if not m:
			raise ExpressionError("Unable to parse an empty attribute mapping")
		components = [self.parse_pair(k, v) for k, v in m.items()]
		if len(components) == 1:
			return components[0]
		return AndComponent(*[self.wrap(c) for c in components])

	def simple_item(
		self,
		attribute: Any,
		value: Any,
		filtertype: SimpleItemType = SimpleItemType.EQUAL,
	) -> FilterComponent:
		"""Build an item from an attribute and a python value.

		Booleans become ``TRUE`` / ``FALSE``, bytes are decoded and other
		values are stringified. Unless values are escaped, an equality on
		``*`` is a Presence item and wildcards make a Substring item, the
		same as when the rendered filter is parsed back.
		"""
		if not is_attribute(attribute):
			raise ExpressionError(
				f"Unable to parse attribute {attribute!r}", fragment=repr(attribute)
			)
		if value is None or is_mapping(value) or is_non_str_iterable(value):
			raise ExpressionError(
				f"Unable to parse value {value!r} for attribute '{attribute}'",
				fragment=repr(value),
			)
		if isinstance(value, bool):
			value = "TRUE" if value else "FALSE"

		if self.escape_values:
			value = escape_value(value)
		elif isinstance(value, bytes):
			value = value.decode("utf-8")
		return item_component(
			attribute.strip(), str(value), SimpleItemType.coerce(filtertype)
		)
