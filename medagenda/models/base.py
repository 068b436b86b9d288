"""Metadata objects, one per service database."""

from sqlalchemy import MetaData

# Scheduling service tables
scheduling_metadata = MetaData()

# Registry service tables
registry_metadata = MetaData()
