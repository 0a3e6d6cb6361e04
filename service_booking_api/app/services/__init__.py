"""
Service layer abstraction.

Each service encapsulates data access or an external channel for a
domain.  Procedures call services through their classmethods so that
storage and notification details stay out of the request handlers.
"""
