"""
Service layer abstraction.

Each service encapsulates the business logic for one area and works
against the ``Database`` handle it is constructed with, so API
handlers never issue SQL themselves.
"""
