from sqlalchemy.orm import declarative_base

# Base class for the table models to inherit from
Base = declarative_base()
