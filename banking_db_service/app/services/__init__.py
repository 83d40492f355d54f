"""
Service layer abstraction.

Each service encapsulates data access for one collection.  Services
receive their collection (and collaborators) through the constructor,
hold no mutable state of their own and can therefore be created per
request around the shared database handle.
"""
