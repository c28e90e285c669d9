from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """Base class for all database models"""
    pass

# Import all models here so Base.metadata knows every table
from models.submitted_link import SubmittedLink

__all__ = ["Base", "SubmittedLink"]
