"""
Persistence layer for VSL projects.
"""
from .connection import SessionLocal, engine, init_db
from .models import Base, VSLProject

__all__ = ["Base", "VSLProject", "SessionLocal", "engine", "init_db"]
