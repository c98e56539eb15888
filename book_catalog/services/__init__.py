"""
Services Package

Business logic kept apart from HTTP handling:

- catalog.py: the in-memory book store, payload validation and the
  result kinds the routers translate into responses
"""
