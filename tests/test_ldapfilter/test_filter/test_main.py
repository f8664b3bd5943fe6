########################### Standard Pytest Imports ############################
import pytest
from pytest_mock import MockerFixture
################################################################################
from ldapfilter.config.runtime import RuntimeSettings
from ldapfilter.exceptions.filter import ExpressionError, FilterArgumentError
from ldapfilter.filter.component import (
	AndComponent,
	FilterOp,
	NotComponent,
	OrComponent,
	PresenceComponent,
	SimpleItemComponent,
	SimpleItemType,
	SubstringItemComponent,
)
from ldapfilter.filter.main import Filter
from ldapfilter.filter.parser import FilterStringParser


class TestPromiscuity:
	@staticmethod
	def test_default_filter_is_promiscuous():
		assert Filter().promiscuous

	@staticmethod
	def test_parsed_object_class_presence_is_promiscuous():
		f = Filter("(objectClass=*)")
		assert f.promiscuous
		assert f == Filter()

	@staticmethod
	def test_simple_item_is_not_promiscuous():
		assert not Filter("uid", "batgirl").promiscuous

	@pytest.mark.parametrize(
		"expression",
		(
			("uid",),
			("uid", ""),
			("objectClass", "person"),
			("description=*basecamp*",),
			(["and", ["uid", "a"]],),
			(["or", ["uid", "a"]],),
			(["not", ["uid", "a"]],),
			(["and", "objectClass"],),
		),
	)
	def test_other_filters_are_not_promiscuous(self, expression):
		assert not Filter(*expression).promiscuous


@pytest.mark.parametrize(
	"expression, expected",
	(
		((), "(objectClass=*)"),
		(("(uid=bargrab)",), "(uid=bargrab)"),
		(("uid=bargrab",), "(uid=bargrab)"),
		(("uid",), "(uid=*)"),
		((["uid"],), "(uid=*)"),
		(("uid", "bigthung"), "(uid=bigthung)"),
		((["uid", "bigthung"],), "(uid=bigthung)"),
		((("uid", "bigthung"),), "(uid=bigthung)"),
		((["&", ["uid", "kunglung"]],), "(&(uid=kunglung))"),
		(
			(["and", ["uid", "kunglung"], ["name", "chunger"]],),
			"(&(uid=kunglung)(name=chunger))",
		),
		((["|", ["uid", "kunglung"]],), "(|(uid=kunglung))"),
		(
			(["or", ["uid", "kunglung"], ["name", "chunger"]],),
			"(|(uid=kunglung)(name=chunger))",
		),
		(
			("or", ["cn~=facet", "cn=structure", "cn=envision"]),
			"(|(cn~=facet)(cn=structure)(cn=envision))",
		),
		(
			(["or", {"uid": ["lar", "bin", "fon", "guh"]}],),
			"(|(uid=lar)(uid=bin)(uid=fon)(uid=guh))",
		),
		((["!", ["uid", "kunglung"]],), "(!(uid=kunglung))"),
		((["not", ["uid", "kunglung"]],), "(!(uid=kunglung))"),
		(([FilterOp.AND, "uid=a", "cn=b"],), "(&(uid=a)(cn=b))"),
		(("uid", ["glumpy", "grumpy", "glee"]), "(|(uid=glumpy)(uid=grumpy)(uid=glee))"),
		(({"cn": "acme"},), "(cn=acme)"),
		(({"cn": "acme", "l": "mars"},), "(&(cn=acme)(l=mars))"),
		(("uidNumber", 1000), "(uidNumber=1000)"),
		(("shadowExpired", True), "(shadowExpired=TRUE)"),
	),
	ids=[
		"default",
		"string literal",
		"unwrapped string literal",
		"bare attribute",
		"single element list",
		"attribute/value pair",
		"attribute/value pair in a list",
		"attribute/value pair in a tuple",
		"AND with a single clause",
		"AND with multiple clauses",
		"OR with a single clause",
		"OR with multiple clauses",
		"OR with string literal clauses",
		"OR with hash form",
		"NOT with symbol",
		"NOT with name",
		"FilterOp head",
		"attribute with list of values",
		"single key mapping",
		"multiple key mapping",
		"integer value",
		"boolean value",
	],
)
def test_filter_to_string(expression: tuple, expected: str):
	assert Filter(*expression).to_string() == expected


def test_complex_nested_expression():
	f = Filter(
		[
			"and",
			[
				"or",
				["and", ["chungability", "fantagulous"], ["l", "the moon"]],
				["chungability", "gruntworthy"],
			],
			["not", ["description", "mediocre"]],
		]
	)
	assert str(f) == (
		"(&(|(&(chungability=fantagulous)(l=the moon))"
		"(chungability=gruntworthy))(!(description=mediocre)))"
	)


def test_string_literal_forms_are_equal():
	assert Filter("(uid=bargrab)") == Filter("uid=bargrab")


def test_not_with_multiple_clauses_raises():
	with pytest.raises(FilterArgumentError, match="2 for 1"):
		Filter(["not", ["uid", "kunglung"], ["name", "chunger"]])


@pytest.mark.parametrize("op", ("and", "or", "not"))
def test_combinator_without_clauses_raises(op: str):
	with pytest.raises(FilterArgumentError):
		Filter([op])


def test_unparsable_string_raises():
	with pytest.raises(ExpressionError, match="(?i)unable to parse"):
		Filter("whatev!")


@pytest.mark.parametrize(
	"expression",
	(
		(1.5,),
		(None,),
		([],),
		({},),
		("uid", "a", "b"),
		("uid", None),
		("uid", []),
		("bad attribute", "value"),
	),
)
def test_invalid_expressions_raise(expression: tuple):
	with pytest.raises(ExpressionError):
		Filter(*expression)


@pytest.mark.parametrize(
	"expression",
	(
		"(objectClass=*)",
		"(uid=bargrab)",
		"(cn~=facet)",
		"(uidNumber>=1000)",
		"(uidNumber<=2000)",
		"(description=*basecamp*)",
		"(cn=a*b*c)",
		"(&(uid=kunglung))",
		"(|(uid=lar)(uid=bin))",
		"(!(description=mediocre))",
		"(&(|(&(chungability=fantagulous)(l=the moon))(chungability=gruntworthy))(!(description=mediocre)))",
	),
)
def test_round_trip(expression: str):
	f = Filter(expression)
	assert str(f) == expression
	assert Filter(str(f)) == f
	assert Filter(str(f)).component == f.component


@pytest.mark.parametrize(
	"build",
	(
		lambda: Filter("cn", "a*b"),
		lambda: Filter("objectClass", "*"),
		lambda: Filter("description", "hello "),
		lambda: Filter("uid", ["a*", "b"]),
		lambda: Filter({"cn": "*acme", "l": "mars"}),
		lambda: Filter(["not", {"description": " mediocre"}]),
		lambda: Filter.eq("cn", "a*b"),
		lambda: Filter.eq("description", "hello "),
		lambda: Filter.eq("shadowExpired", False),
		lambda: Filter.substr("cn", ["plain"]),
		lambda: Filter.substr("cn", ["", ""]),
		lambda: Filter.ge("uidNumber", 5),
		lambda: Filter.approximate("cn", "fa*cet"),
	),
	ids=[
		"Pair with wildcard value",
		"Pair with lone wildcard value",
		"Pair with trailing space in value",
		"Pair with list of values",
		"Mapping",
		"NOT over mapping",
		"eq with wildcard value",
		"eq with trailing space in value",
		"eq with boolean value",
		"substr without wildcard",
		"substr with only a wildcard",
		"ge",
		"approximate with wildcard value",
	],
)
def test_round_trip_built_filters(build):
	f = build()
	assert Filter(str(f)) == f
	assert Filter(str(f)).promiscuous == f.promiscuous


def test_string_values_keep_whitespace():
	f = Filter("(description=hello )")
	assert f.component.value == "hello "
	assert str(f) == "(description=hello )"


class TestFilterConstruction:
	@staticmethod
	def test_from_component():
		component = SimpleItemComponent("uid", "slange")
		assert Filter(component).component is component

	@staticmethod
	def test_from_filter():
		f = Filter("uid", "slange")
		assert Filter(f) == f

	@staticmethod
	def test_with_component_returns_new_filter():
		f = Filter("uid", "slange")
		component = PresenceComponent("cn")
		result = f.with_component(component)
		assert result is not f
		assert result.component is component
		assert f.component == SimpleItemComponent("uid", "slange")

	@staticmethod
	def test_with_component_raises_type_error():
		with pytest.raises(TypeError):
			Filter().with_component("uid=slange")

	@staticmethod
	def test_is_immutable():
		f = Filter("uid", "slange")
		with pytest.raises(AttributeError):
			f.component = PresenceComponent("uid")

	@staticmethod
	def test_hashable():
		assert len({Filter("uid=a"), Filter("(uid=a)"), Filter("uid", "a")}) == 1

	@staticmethod
	def test_repr():
		assert repr(Filter("uid", "a")) == "Filter('(uid=a)')"

	@staticmethod
	def test_escapes_pair_values_when_enabled(mocker: MockerFixture):
		mocker.patch.object(RuntimeSettings, "LDAP_FILTER_ESCAPE_VALUES", True)
		assert str(Filter("cn", "a*(b)")) == "(cn=a\\2a\\28b\\29)"

	@staticmethod
	def test_does_not_escape_string_literals_when_enabled(mocker: MockerFixture):
		mocker.patch.object(RuntimeSettings, "LDAP_FILTER_ESCAPE_VALUES", True)
		assert str(Filter("cn=a*b")) == "(cn=a*b)"

	@staticmethod
	def test_does_not_escape_by_default():
		assert str(Filter("cn", "a*b")) == "(cn=a*b)"


class TestOperators:
	@pytest.fixture
	def filter1(self) -> Filter:
		return Filter("uid", "buckrogers")

	@pytest.fixture
	def filter2(self) -> Filter:
		return Filter("l", "mars")

	def test_equal_if_components_equal(self, filter1: Filter):
		other = Filter(SimpleItemComponent("uid", "buckrogers"))
		assert filter1 == other
		assert filter1 is not other

	def test_not_equal_to_other_types(self, filter1: Filter):
		assert filter1 != "(uid=buckrogers)"

	def test_add_creates_and_filter(self, filter1: Filter, filter2: Filter):
		result = filter1 + filter2
		assert isinstance(result, Filter)
		assert result.component == AndComponent(filter1, filter2)
		assert str(result) == "(&(uid=buckrogers)(l=mars))"

	def test_bitwise_and_creates_and_filter(self, filter1: Filter, filter2: Filter):
		result = filter1 & filter2
		assert isinstance(result, Filter)
		assert result == filter1 + filter2

	@pytest.mark.parametrize("operator", ("__add__", "__and__", "combine"))
	def test_left_promiscuous_operand_is_dropped(self, operator: str, filter2: Filter):
		result = getattr(Filter(), operator)(filter2)
		assert result == filter2
		assert result is filter2

	@pytest.mark.parametrize("operator", ("__add__", "__and__", "combine"))
	def test_right_promiscuous_operand_is_dropped(self, operator: str, filter1: Filter):
		result = getattr(filter1, operator)(Filter())
		assert result == filter1
		assert result is filter1

	def test_promiscuous_combined_with_promiscuous(self):
		assert (Filter() & Filter()).promiscuous

	def test_combine_with_string(self, filter1: Filter):
		assert str(filter1 & "l=mars") == "(&(uid=buckrogers)(l=mars))"

	@pytest.mark.parametrize("operator", ("__add__", "__and__"))
	def test_string_operand_is_parsed_once(
		self, mocker: MockerFixture, operator: str, filter1: Filter
	):
		m_parse = mocker.spy(FilterStringParser, "parse")
		getattr(filter1, operator)("l=mars")
		assert m_parse.call_count == 1

	@pytest.mark.parametrize(
		"promiscuous",
		(
			lambda: Filter("objectClass", "*"),
			lambda: Filter({"objectclass": "*"}),
			lambda: Filter.eq("objectClass", "*"),
		),
		ids=["pair", "mapping", "eq"],
	)
	def test_built_promiscuous_operand_is_dropped(self, promiscuous, filter1: Filter):
		assert promiscuous().promiscuous
		assert (promiscuous() & filter1) == filter1
		assert (filter1 + promiscuous()) == filter1

	def test_combine_with_unsupported_type(self, filter1: Filter):
		with pytest.raises(TypeError):
			filter1 & 1
		with pytest.raises(TypeError):
			filter1.combine(1)

	def test_or(self, filter1: Filter, filter2: Filter):
		result = filter1 | filter2
		assert result.component == OrComponent(filter1, filter2)
		assert str(result) == "(|(uid=buckrogers)(l=mars))"

	def test_or_with_promiscuous_matches_everything(self, filter1: Filter):
		assert (filter1 | Filter()).promiscuous
		assert (Filter() | filter1).promiscuous

	def test_invert(self, filter1: Filter):
		result = ~filter1
		assert result.component == NotComponent(filter1)
		assert str(result) == "(!(uid=buckrogers))"


class TestFactoryMethods:
	@staticmethod
	def test_parse():
		assert Filter.parse("uid=bargrab") == Filter("(uid=bargrab)")

	@staticmethod
	def test_parse_raises_type_error():
		with pytest.raises(TypeError):
			Filter.parse(["uid", "bargrab"])

	@staticmethod
	def test_eq():
		assert Filter.eq("mockAttribute", "mockValue").to_string() == "(mockAttribute=mockValue)"

	@pytest.mark.parametrize(
		"method, value, expected",
		(
			("eq", b"caf\xc3\xa9", "(cn=café)"),
			("eq", True, "(cn=TRUE)"),
			("ge", False, "(cn>=FALSE)"),
			("le", b"b", "(cn<=b)"),
			("approximate", 1, "(cn~=1)"),
		),
	)
	def test_converts_values_like_pairs(self, method: str, value, expected: str):
		assert getattr(Filter, method)("cn", value).to_string() == expected

	@staticmethod
	def test_eq_escapes_when_enabled(mocker: MockerFixture):
		mocker.patch.object(RuntimeSettings, "LDAP_FILTER_ESCAPE_VALUES", True)
		assert Filter.eq("cn", "a*b").to_string() == "(cn=a\\2ab)"

	@pytest.mark.parametrize("method", ("eq", "ge", "le", "approximate"))
	def test_comparison_raises_invalid_attribute(self, method: str):
		with pytest.raises(ExpressionError, match="Unable to parse attribute"):
			getattr(Filter, method)("bad attribute", "value")

	@staticmethod
	def test_has():
		assert Filter.has("mockAttribute").to_string() == "(mockAttribute=*)"

	@pytest.mark.parametrize(
		"parts, expected",
		(
			(["", "mockValue"], "(mockAttribute=*mockValue)"),
			(["mockValue", ""], "(mockAttribute=mockValue*)"),
			(["", "mockValue", ""], "(mockAttribute=*mockValue*)"),
			(["mock", "Value"], "(mockAttribute=mock*Value)"),
		),
		ids=[
			"Wildcard at start",
			"Wildcard at end",
			"Wildcard at start and end",
			"Wildcard between parts",
		],
	)
	def test_substr(self, parts: list[str], expected: str):
		f = Filter.substr("mockAttribute", parts)
		assert isinstance(f.component, SubstringItemComponent)
		assert f.to_string() == expected

	@pytest.mark.parametrize(
		"parts, expected",
		(
			(["mockValue"], SimpleItemComponent("mockAttribute", "mockValue")),
			(["", ""], PresenceComponent("mockAttribute")),
		),
		ids=[
			"No wildcards is an equality",
			"Lone wildcard is a presence",
		],
	)
	def test_substr_without_value_around_wildcard(self, parts: list[str], expected):
		assert Filter.substr("mockAttribute", parts).component == expected

	@pytest.mark.parametrize(
		"method, expected",
		(
			("ge", "(mockAttribute>=1)"),
			("le", "(mockAttribute<=1)"),
			("approximate", "(mockAttribute~=1)"),
		),
	)
	def test_comparisons(self, method: str, expected: str):
		assert getattr(Filter, method)("mockAttribute", 1).to_string() == expected

	@pytest.mark.parametrize("count", (1, 2, 3))
	def test_and(self, count: int):
		r = range(1, count + 1)
		expected = "".join(f"(mockAttribute{i}=mockValue{i})" for i in r)
		assert Filter.and_(
			*[Filter.eq(f"mockAttribute{i}", f"mockValue{i}") for i in r]
		).to_string() == f"(&{expected})"

	@pytest.mark.parametrize("count", (1, 2, 3))
	def test_or(self, count: int):
		r = range(1, count + 1)
		expected = "".join(f"(mockAttribute{i}=mockValue{i})" for i in r)
		assert Filter.or_(
			*[Filter.eq(f"mockAttribute{i}", f"mockValue{i}") for i in r]
		).to_string() == f"(|{expected})"

	@pytest.mark.parametrize("method", ("and_", "or_"))
	def test_logical_without_children_raises(self, method: str):
		with pytest.raises(FilterArgumentError):
			getattr(Filter, method)()

	@staticmethod
	def test_not():
		assert Filter.not_(
			Filter.eq("mockAttribute", "mockValue")
		).to_string() == "(!(mockAttribute=mockValue))"

	@staticmethod
	def test_factories_match_parsed_components():
		assert Filter.ge("uidNumber", 5) == Filter("uidNumber>=5")
		assert Filter.substr("cn", ["", "a", ""]).component == SubstringItemComponent("cn", "*a*")
		assert Filter.eq("cn", "a").component.filtertype == SimpleItemType.EQUAL
