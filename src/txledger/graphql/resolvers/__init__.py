"""Resolver package for the GraphQL schema.

Resolvers open a ledger connection per call, run one statement, and map the
result onto the GraphQL types. Errors are not caught here; they surface in the
GraphQL ``errors`` array for the field that raised.
"""

# Intentionally empty; functions are defined in sibling modules.
