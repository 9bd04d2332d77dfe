"""Routing: scoped middleware composition over a shared match table.

Routes are composed with their middleware when registered and stored in
one table per router tree; dispatch is a single lookup.
"""

from perch.routing.context import Router, new_router
from perch.routing.route import Route, RouteMatch
from perch.routing.table import MatchTable, TrieTable

__all__ = ["MatchTable", "Route", "RouteMatch", "Router", "TrieTable", "new_router"]
