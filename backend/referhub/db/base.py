from sqlalchemy.orm import declarative_base

# Base class used by all ORM models in referhub.models
Base = declarative_base()
