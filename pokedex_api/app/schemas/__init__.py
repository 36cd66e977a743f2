"""
Pydantic schema definitions for API payloads.

Request bodies and query parameters are validated by the models in
this package before reaching the service layer.  Stored documents are
plain dictionaries; helpers here convert them into JSON friendly
representations.
"""
