"""
Service layer abstraction.

Services encapsulate the storage logic for a domain so that API
handlers never issue queries themselves.
"""
