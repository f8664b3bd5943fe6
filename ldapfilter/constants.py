# ldapfilter.constants

# LDAP Attributes
LDAP_ATTR_OBJECT_CLASS = "objectClass"

# Filter Grammar
LDAP_FILTER_LPAREN = "("
LDAP_FILTER_RPAREN = ")"
LDAP_FILTER_WILDCARD = "*"
LDAP_FILTER_AND = "&"
LDAP_FILTER_OR = "|"
LDAP_FILTER_NOT = "!"

# Simple Item filtertype name -> operator symbol
LDAP_FILTER_OPERATORS = {
	"equal": "=",
	"approx": "~=",
	"greater": ">=",
	"less": "<=",
}

# Symbolic expression heads accepted for each combinator
LDAP_FILTER_COMBINATOR_TOKENS = {
	"and": LDAP_FILTER_AND,
	LDAP_FILTER_AND: LDAP_FILTER_AND,
	"or": LDAP_FILTER_OR,
	LDAP_FILTER_OR: LDAP_FILTER_OR,
	"not": LDAP_FILTER_NOT,
	LDAP_FILTER_NOT: LDAP_FILTER_NOT,
}
