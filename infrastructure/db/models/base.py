"""
Shared declarative base for the explore tables.
"""
from sqlalchemy import MetaData
from sqlalchemy.orm import registry

# Unnamed constraints get deterministic names, e.g. uq_decisions_actor_id_recipient_id
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "pk": "pk_%(table_name)s",
}

mapper_registry = registry(metadata=MetaData(naming_convention=NAMING_CONVENTION))
Base = mapper_registry.generate_base()
