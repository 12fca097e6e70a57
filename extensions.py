"""Shared extensions for the Flask app.

Kept separate from ``app.py`` so models and the storage layer can import the
database handle without importing the application module.
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
