"""
Pydantic schema definitions for procedure payloads.

Each domain defines its own input and output models.  Models use
camelCase aliases on the wire and snake_case attributes in Python.
"""
