"""
Declarative base for the database models
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
