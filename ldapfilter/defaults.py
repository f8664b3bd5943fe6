################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapfilter.defaults

### LDAP FILTER SETTINGS
# ! You also have to add the settings to the following files:
# ldapfilter.config.runtime
# ldapfilter.defaults	<------------ You're Here

# Escape RFC4515 special characters ( \ * ( ) NUL ) in values passed
# through attribute/value pairs or mappings.
# String literals are never escaped, they are parsed as written.
LDAP_FILTER_ESCAPE_VALUES = False

# Maximum nesting of combinators (&, |, !) accepted by the parser.
LDAP_FILTER_MAX_DEPTH = 64
