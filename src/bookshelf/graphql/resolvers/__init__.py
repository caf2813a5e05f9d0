"""Resolver functions referenced by the GraphQL types, queries and mutations.

Resolvers pull the library service from the request context, run the
service call inside ``graphql_errors()`` and convert domain records to
GraphQL types.
"""
