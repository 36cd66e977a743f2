"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives its
MongoDB collection through the constructor, so API handlers and tests
can supply any collection with the same async interface.
"""
