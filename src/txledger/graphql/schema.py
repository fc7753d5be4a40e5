"""
Main GraphQL schema definition using Strawberry
"""

from datetime import datetime
from typing import Any

import strawberry
from fastapi import Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..ledger import LedgerDriver
from ..logging import get_logger
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

# Ledger timestamps are stored at millisecond precision; always print three
# fractional digits, including ".000".
DateTime = strawberry.scalar(
    datetime,
    name="DateTime",
    description="ISO-8601 date-time with millisecond precision and UTC offset",
    serialize=lambda value: value.isoformat(timespec="milliseconds"),
    parse_value=datetime.fromisoformat,
)

# Introspection is enabled by default in strawberry
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    scalar_overrides={datetime: DateTime},
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core's structural validation followed by a full introspection
    query, so unresolved type references fail the server at boot rather than
    at request time.

    Raises:
        Exception: If the schema is invalid or introspection fails
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(ledger: LedgerDriver) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI bound to a ledger driver."""

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
            "ledger": ledger,
        }

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql",
        context_getter=get_context,
    )
