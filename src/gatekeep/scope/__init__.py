"""Query scoping for SQLAlchemy SELECT statements."""

from gatekeep.scope._query import SCOPE_ATTRIBUTE, ScopeFn, scope_query

__all__ = ["SCOPE_ATTRIBUTE", "ScopeFn", "scope_query"]
