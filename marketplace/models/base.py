"""
Declarative base for all models
"""
import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> str:
    """Primary keys are random UUID strings"""
    return str(uuid.uuid4())
