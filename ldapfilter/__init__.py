# ldapfilter
from ldapfilter.filter.main import Filter
from ldapfilter.filter.component import (
	FilterOp,
	SimpleItemType,
	PresenceComponent,
	SimpleItemComponent,
	SubstringItemComponent,
	AndComponent,
	OrComponent,
	NotComponent,
)
from ldapfilter.exceptions.filter import ExpressionError, FilterArgumentError

__all__ = [
	"Filter",
	"FilterOp",
	"SimpleItemType",
	"PresenceComponent",
	"SimpleItemComponent",
	"SubstringItemComponent",
	"AndComponent",
	"OrComponent",
	"NotComponent",
	"ExpressionError",
	"FilterArgumentError",
]
